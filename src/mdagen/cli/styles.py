"""Console styling for the mdagen CLI.

Semantic style names (success, error, path, ...) are defined once in a rich
Theme; commands print through the shared ``console`` and the ``Messages``
helpers so every command formats status lines the same way.
"""

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme


@dataclass
class ColorTheme:
    """Colors of the CLI theme."""

    error: str = "#ff0000"
    warning: str = "#ffaa00"
    success: str = "#5fa86f"
    primary: str = "#5f87d7"
    info: str = "#5fafaf"
    path: str = "#a2ae9d"
    command: str = "#d7af5f"
    text_dim: str = "#666666"


def _build_rich_theme(theme: ColorTheme) -> Theme:
    return Theme(
        {
            "success": f"bold {theme.success}",
            "error": f"bold {theme.error}",
            "warning": f"bold {theme.warning}",
            "info": f"bold {theme.info}",
            "header": f"bold {theme.primary}",
            "label": "bold",
            "value": theme.success,
            "path": theme.path,
            "command": theme.command,
            "dim": theme.text_dim,
        }
    )


DEFAULT_THEME = ColorTheme()

console = Console(theme=_build_rich_theme(DEFAULT_THEME))


class Messages:
    """Pre-formatted message helpers."""

    @staticmethod
    def success(text: str) -> str:
        return f"[success]✓ {text}[/success]"

    @staticmethod
    def error(text: str) -> str:
        return f"[error]✗ {text}[/error]"

    @staticmethod
    def warning(text: str) -> str:
        return f"[warning]⚠️  {text}[/warning]"

    @staticmethod
    def header(text: str) -> str:
        return f"[header]{text}[/header]"

    @staticmethod
    def label_value(label: str, value: str) -> str:
        """Format a label-value pair."""
        return f"[label]{label}:[/label] [value]{value}[/value]"

    @staticmethod
    def path(text: str) -> str:
        return f"[path]{text}[/path]"
