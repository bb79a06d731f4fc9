"""Core business logic modules for the playlist sync application.

This package contains the main business logic organized by workflow step:
- library: Reading playlists from the media library
- filesystem: Target directory scanning and file primitives
- sync: Reconciliation, playlist output and orchestration
"""

__all__: list[str] = []
