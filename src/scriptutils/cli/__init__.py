"""Command-line entry point for shell scripts."""
from .main import build_parser, main

__all__ = ["build_parser", "main"]
