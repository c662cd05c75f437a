"""Plugin loading.

Plugins are Python files found in the platform tree:

- scripts (``<platform>/*.py``, ``<platform>/<Stereotype>/*.py``) expose
  lifecycle hooks as module-level functions:

  ``init_platform(context)``
      once, before the model walk (project scripts only)
  ``init_project_templates(context)``
      once, after the model walk, before project templates render
  ``init_<kind>(context, value)``
      once per distinct identity, driven by :class:`ScriptRunner`
      (``init_stereotype``, ``init_class``)

- helpers (``<dir>/_helpers/*.py``) expose one callable named after the file
  (``_helpers/snake_case.py`` defines ``snake_case``) or named ``helper``;
- partials (``<dir>/_partials/*.j2``) are template fragments.

Loaded scripts are cached per resolved path, so referencing a script again
returns the same handle together with its execution record.
"""

import hashlib
import importlib.util
import re
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any

from mdagen.errors import PluginLoadError
from mdagen.utils.logger import get_logger

from .engine import TemplateEngine
from .paths import PathResolver

logger = get_logger("plugins")

HOOK_PREFIX = "init_"
HELPERS_DIR = "_helpers"
PARTIALS_DIR = "_partials"


@dataclass(eq=False)
class PluginHandle:
    """Descriptor of a loaded plugin script.

    Attributes:
        name: Script name (file stem)
        path: Absolute path of the script
        module: The imported module
        executed: Execution record, init kind -> identity -> already run
    """

    name: str
    path: Path
    module: ModuleType
    executed: dict[str, dict[str, bool]] = field(default_factory=dict)

    @property
    def hooks(self) -> list[str]:
        """Names of the lifecycle hooks this script provides."""
        return sorted(
            name
            for name, value in vars(self.module).items()
            if name.startswith(HOOK_PREFIX) and callable(value)
        )

    def get_hook(self, hook_name: str) -> Callable | None:
        hook = getattr(self.module, hook_name, None)
        return hook if callable(hook) else None

    def call_hook(self, hook_name: str, *args: Any) -> bool:
        """Call a hook if present.

        Returns:
            True if the hook exists and was called
        """
        hook = self.get_hook(hook_name)
        if hook is None:
            return False
        hook(*args)
        return True

    def __repr__(self) -> str:
        return f"PluginHandle(name={self.name!r}, path={str(self.path)!r}, hooks={self.hooks})"


class PluginLoader:
    """Loads scripts, helpers and partials for one generation run."""

    def __init__(
        self,
        engine: TemplateEngine,
        resolver: PathResolver,
        script_extension: str = ".py",
        template_extension: str = ".j2",
    ):
        self.engine = engine
        self.resolver = resolver
        self.script_extension = script_extension
        self.template_extension = template_extension
        self._scripts: dict[Path, PluginHandle] = {}

    @property
    def loaded_scripts(self) -> list[PluginHandle]:
        return list(self._scripts.values())

    def load_helpers(self, base_dir: str | Path) -> list[str]:
        """Register every helper under ``base_dir/_helpers``.

        Returns:
            Names of the registered helpers

        Raises:
            PluginLoadError: If a helper module fails to import or defines no helper
        """
        logger.debug(f"Loading helpers from directory {base_dir}")
        names = []
        for helper_file in self.resolver.resolve(base_dir, HELPERS_DIR, self.script_extension):
            if helper_file.name.startswith("_"):
                continue
            module = _import_file(_absolute(helper_file))
            helper_name = helper_file.stem
            helper = getattr(module, helper_name, None) or getattr(module, "helper", None)
            if not callable(helper):
                raise PluginLoadError(
                    f"Helper file {helper_file} must define a callable named "
                    f"'{helper_name}' or 'helper'",
                    path=str(helper_file),
                )
            self.engine.register_helper(helper_name, helper)
            names.append(helper_name)
        return names

    def load_partials(self, base_dir: str | Path) -> list[str]:
        """Register every partial under ``base_dir/_partials``.

        Returns:
            Names of the registered partials
        """
        logger.debug(f"Loading partials from directory {base_dir}")
        names = []
        for partial_file in self.resolver.resolve(base_dir, PARTIALS_DIR, self.template_extension):
            partial_name = partial_file.name[: -len(self.template_extension)]
            self.engine.register_partial(partial_name, partial_file.read_text(encoding="utf-8"))
            names.append(partial_name)
        return names

    def load_scripts(self, base_dir: str | Path, stereotype: Any = None) -> list[PluginHandle]:
        """Load the scripts of ``base_dir`` (or of its stereotype subdirectory).

        Files whose name starts with ``_`` (such as ``__init__.py``) are skipped.
        """
        files = self.resolver.resolve(base_dir, stereotype, self.script_extension)
        return [self.load_script(path) for path in files if not path.name.startswith("_")]

    def load_script(self, path: str | Path) -> PluginHandle:
        """Load one script, reusing the cached handle when already loaded.

        Relative paths are resolved against the current working directory.

        Raises:
            PluginLoadError: If the module cannot be imported
        """
        resolved = _absolute(Path(path))
        handle = self._scripts.get(resolved)
        if handle is None:
            module = _import_file(resolved)
            handle = PluginHandle(name=resolved.stem, path=resolved, module=module)
            self._scripts[resolved] = handle
            logger.debug(f"Loaded script {resolved} (hooks: {', '.join(handle.hooks) or 'none'})")
        return handle


def _absolute(path: Path) -> Path:
    if not path.is_absolute():
        path = Path.cwd() / path
    return path.resolve()


def _module_name(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:10]
    stem = re.sub(r"\W", "_", path.stem)
    return f"mdagen_plugin_{stem}_{digest}"


def _import_file(path: Path) -> ModuleType:
    """Import a Python file as a uniquely named module."""
    module_name = _module_name(path)
    try:
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise PluginLoadError(f"Cannot load spec from: {path}", path=str(path))

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except PluginLoadError:
        raise
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise PluginLoadError(f"Failed to load plugin {path}: {e}", path=str(path)) from e
    return module
