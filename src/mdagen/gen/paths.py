"""Discovery of plugin files by stereotype.

A platform directory is laid out by stereotype::

    <platform>/
        *.py, *.j2            project scripts and templates
        <Stereotype>/*.py     stereotype scripts
        <Stereotype>/*.j2     stereotype templates
        <Stereotype>/alias.json

``alias.json`` holds a JSON string naming another platform-relative
directory; the stereotype then reuses that directory's files.
"""

import json
from pathlib import Path
from typing import Any

from mdagen.utils.logger import get_logger

logger = get_logger("plugins")

ALIAS_FILE_NAME = "alias.json"


class PathResolver:
    """Turns (base directory, stereotype, extension) into a file list."""

    def __init__(self, platform_dir: str | Path):
        """
        Args:
            platform_dir: Directory alias paths are relative to
        """
        self.platform_dir = Path(platform_dir)

    def directory(self, base_dir: str | Path, stereotype: Any = None) -> Path:
        """Directory searched for ``stereotype``, after alias redirection."""
        dir_path = Path(base_dir)
        if stereotype is not None:
            dir_path = dir_path / _stereotype_name(stereotype)

        alias_file = dir_path / ALIAS_FILE_NAME
        if alias_file.is_file():
            with open(alias_file, encoding="utf-8") as f:
                alias_path = json.load(f)
            if not isinstance(alias_path, str):
                raise ValueError(
                    f"{alias_file} must contain a JSON string naming a platform-relative "
                    f"directory, got {type(alias_path).__name__}"
                )
            dir_path = self.platform_dir / alias_path
            logger.debug(f"Using alias directory {dir_path} for stereotype {stereotype}")

        return dir_path

    def resolve(self, base_dir: str | Path, stereotype: Any, extension: str) -> list[Path]:
        """List files ending in ``extension``, sorted by name.

        Args:
            base_dir: Directory to search
            stereotype: Stereotype (or stereotype name) naming a subdirectory,
                or None to search ``base_dir`` itself
            extension: File name suffix, with or without a leading ``*``

        Returns:
            Matching files; an empty list when the directory does not exist
        """
        dir_path = self.directory(base_dir, stereotype)
        if not dir_path.is_dir():
            return []

        pattern = extension if extension.startswith("*") else f"*{extension}"
        return sorted(path for path in dir_path.glob(pattern) if path.is_file())


def _stereotype_name(stereotype: Any) -> str:
    if isinstance(stereotype, str):
        return stereotype
    return stereotype.name
