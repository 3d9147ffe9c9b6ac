"""Derive JSON Schema documents from documented JavaScript model classes."""

__version__ = "0.1.0"
