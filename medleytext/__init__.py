"""Editing core for a markdown-first text editor: buffer, find/replace, autocomplete and file palette."""

__version__ = "0.1.0"