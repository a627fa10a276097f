"""Core primitives: errors, logging and file access."""
