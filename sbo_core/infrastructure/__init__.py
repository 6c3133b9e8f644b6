"""Infrastructure layer: in-memory adapters, offline cache, clock and logging."""
