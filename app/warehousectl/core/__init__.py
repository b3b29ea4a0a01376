"""Core paths, settings and response types."""
