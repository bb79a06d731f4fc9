"""Utility helpers for the playlist sync application."""
