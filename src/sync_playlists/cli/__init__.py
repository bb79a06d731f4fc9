"""Command-line interface for the playlist sync application."""
