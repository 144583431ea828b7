"""Merge the text files of a directory tree into a single file."""

__version__ = "0.1.0"
