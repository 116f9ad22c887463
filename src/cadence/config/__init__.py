"""Configuration: discovery, models, settings and logging."""
