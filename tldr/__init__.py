"""TLDR article summarizer."""

__version__ = "0.1.0"
