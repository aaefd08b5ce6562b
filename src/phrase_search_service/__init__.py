"""Phrase Search Service - synonym-based search link generation."""

__version__ = "0.1.0"
