"""Output routing.

All filesystem writes of a run go through :class:`OutputRouter`. Aggregate
outputs share one open handle per path for the whole run; the handles are
owned by an :class:`AggregateFileManager` that the pipeline closes when the
run ends, whether it succeeded or not.
"""

from pathlib import Path
from typing import IO

from mdagen.utils.logger import get_logger

from .context import RenderContext
from .directives import OutputMode, property_name

logger = get_logger("output")


def ensure_parent_dirs(path: str | Path) -> None:
    """Create the parent directories of ``path`` if needed."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


class AggregateFileManager:
    """Open aggregate files of one run, keyed by resolved path.

    The first write to a path truncates the file; later writes append.

    Example:
        >>> with AggregateFileManager() as aggregates:
        ...     aggregates.write("gen/routes.txt", "a\\n")
        ...     aggregates.write("gen/routes.txt", "b\\n")
    """

    def __init__(self):
        self._handles: dict[Path, IO[str]] = {}

    def __enter__(self) -> "AggregateFileManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close_all()

    @property
    def open_paths(self) -> list[Path]:
        return list(self._handles)

    def is_open(self, path: str | Path) -> bool:
        return Path(path).resolve() in self._handles

    def write(self, path: str | Path, body: str) -> Path:
        key = Path(path).resolve()
        handle = self._handles.get(key)
        if handle is None:
            logger.debug(f"Opening aggregate file {key}")
            handle = open(key, "w", encoding="utf-8")
            self._handles[key] = handle
        handle.write(body)
        return key

    def close_all(self) -> int:
        """Close every open handle.

        Returns:
            Number of handles closed
        """
        closed = 0
        while self._handles:
            path, handle = self._handles.popitem()
            handle.close()
            logger.debug(f"Closed aggregate file {path}")
            closed += 1
        return closed


class OutputRouter:
    """Performs the side effect of one output mode."""

    def __init__(self, aggregates: AggregateFileManager):
        self.aggregates = aggregates

    def route(
        self,
        mode: OutputMode,
        output_path: str | Path,
        body: str,
        context: RenderContext,
    ) -> Path | None:
        """Route a rendered body.

        Returns:
            The file written to, or None when nothing was written
        """
        mode = OutputMode(mode)
        path = Path(output_path)

        if mode is OutputMode.OVERWRITE:
            ensure_parent_dirs(path)
            path.write_text(body, encoding="utf-8")
            logger.info(f"Generated {path}")
            return path

        if mode is OutputMode.PRESERVE:
            if path.exists():
                logger.debug(f"Preserving existing file {path}")
                return None
            ensure_parent_dirs(path)
            path.write_text(body, encoding="utf-8")
            logger.info(f"Generated {path}")
            return path

        if mode is OutputMode.AGGREGATE:
            ensure_parent_dirs(path)
            self.aggregates.write(path, body)
            logger.info(f"Appended to {path}")
            return path

        if mode is OutputMode.PROPERTY:
            name = property_name(path)
            context.accumulate(name, body)
            logger.debug(f"Accumulated output into context property '{name}'")
            return None

        logger.debug(f"Ignored output for {path}")
        return None
