"""Data models for kdiff."""
