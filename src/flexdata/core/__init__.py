"""Core utilities: configuration, logging and shared exceptions."""
