"""Grid primitives and the frontier queue."""
