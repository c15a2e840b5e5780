"""Core infrastructure: configuration, logging and filesystem paths."""
