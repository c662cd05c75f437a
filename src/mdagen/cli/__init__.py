"""Command line interface for mdagen.

Commands:
    generate: Generate code for a model document
    platforms: List the bundled platforms
"""

from .main import cli, main

__all__ = ["cli", "main"]
