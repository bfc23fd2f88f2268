"""Configuration: settings and logging setup for host applications."""
