"""Core infrastructure: logging, configuration, messaging and resource paths."""
