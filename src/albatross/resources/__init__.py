"""Bundled default documents used to bootstrap missing files."""
