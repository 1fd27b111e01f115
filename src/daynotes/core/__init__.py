"""Core note logic shared by the CLI commands."""
