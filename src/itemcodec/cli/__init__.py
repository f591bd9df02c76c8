"""Command-line interface for itemcodec."""
