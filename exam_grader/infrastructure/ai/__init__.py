"""AI infrastructure: embedding backends."""
