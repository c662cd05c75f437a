"""Generation options.

Options are read from the ``generation`` section of mdagen.yml and can be
overridden per run (e.g. by CLI flags). They are exposed to every template
and script as ``options``; extra keys in the configuration section are kept
so platforms can define their own settings.

Example mdagen.yml::

    generation:
      platform: python
      output: ./gen
      package_delimiter: "::"
      comment_width: 72
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mdagen.utils.config import get_config_builder


def bundled_platforms_root() -> Path:
    """Directory holding the platforms shipped with mdagen."""
    import mdagen.platforms

    return Path(mdagen.platforms.__file__).parent


def bundled_global_plugins_dir() -> Path:
    """Directory holding the global helpers and partials shipped with mdagen."""
    return Path(__file__).parent.parent / "global_plugins"


def list_bundled_platforms() -> list[str]:
    """Names of the bundled platforms."""
    root = bundled_platforms_root()
    return sorted(
        d.name for d in root.iterdir() if d.is_dir() and not d.name.startswith(("_", "."))
    )


class GenerationOptions(BaseModel):
    """Generation-wide configuration."""

    model_config = ConfigDict(extra="allow")

    output: str = Field(default="./gen", description="Output root directory")
    platform: str = Field(default="python", description="Target platform name or directory")
    platform_dir: Path | None = Field(default=None, description="Explicit platform directory")
    global_plugins_dir: Path | None = Field(
        default=None, description="Directory with global _helpers and _partials"
    )
    package_delimiter: str = "::"
    template_extension: str = ".j2"
    script_extension: str = ".py"
    comment_width: int = Field(default=80, gt=0)

    def resolved_platform_dir(self) -> Path:
        """Directory of the target platform.

        An explicit ``platform_dir`` wins; a ``platform`` naming an existing
        directory is used as is; otherwise the bundled platform of that name.
        """
        if self.platform_dir is not None:
            return Path(self.platform_dir)
        candidate = Path(self.platform)
        if candidate.is_dir():
            return candidate
        return bundled_platforms_root() / self.platform

    def resolved_global_plugins_dir(self) -> Path:
        if self.global_plugins_dir is not None:
            return Path(self.global_plugins_dir)
        return bundled_global_plugins_dir()

    @classmethod
    def from_config(cls, config_path: str | Path | None = None, **overrides: Any) -> "GenerationOptions":
        """Build options from the ``generation`` config section plus overrides.

        Overrides whose value is None are ignored, so unset CLI flags keep the
        configured values.
        """
        settings = dict(get_config_builder(config_path).get_section("generation"))
        settings.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**settings)
