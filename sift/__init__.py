"""Sift - fuzzy search and smart lists for a GTD task store."""

__version__ = "0.1.0"
