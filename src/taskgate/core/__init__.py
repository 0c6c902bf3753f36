"""Core infrastructure: configuration-independent building blocks."""
