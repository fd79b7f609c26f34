"""CSV tokenization and row classification."""

from .classifier import ClassifiedRows, classify_rows
from .tokenizer import MalformedRowError, tokenize
from .writer import render_row, render_rows

__all__ = [
    "ClassifiedRows",
    "MalformedRowError",
    "classify_rows",
    "render_row",
    "render_rows",
    "tokenize",
]
