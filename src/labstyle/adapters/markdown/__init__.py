"""Markdown / Quarto lab document parser (no I/O)."""

from .parser import parse

__all__ = ["parse"]
