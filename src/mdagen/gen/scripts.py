"""Once-per-identity execution of script hooks."""

import re
from typing import Any

from mdagen.errors import ErrorKind
from mdagen.utils.logger import get_logger

from .plugins import HOOK_PREFIX, PluginHandle

logger = get_logger("plugins")


def hook_name_for(init_kind: str) -> str:
    """Hook name for an init kind: ``"Stereotype"`` -> ``init_stereotype``."""
    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", init_kind).replace("-", "_").lower()
    return HOOK_PREFIX + snake


class ScriptRunner:
    """Calls ``init_<kind>`` hooks at most once per (script, kind, identity).

    Args:
        report: Optional report collecting advisories (anything with
            an ``advise(kind, message)`` method)
    """

    def __init__(self, report: Any = None):
        self.report = report
        self._missing: set[tuple[str, str]] = set()

    def run_once(
        self,
        script: PluginHandle,
        init_kind: str,
        identity_name: str,
        identity_value: Any,
        context: Any,
    ) -> bool:
        """Run the script's hook for this identity unless it already ran.

        The identity is marked executed before the hook is called, so a
        hook that walks back into the runner does not run twice.

        Returns:
            True if the hook was invoked by this call
        """
        executed = script.executed.setdefault(init_kind, {})
        if executed.get(identity_name):
            return False
        executed[identity_name] = True

        hook_name = hook_name_for(init_kind)
        hook = script.get_hook(hook_name)
        if hook is None:
            self._record_missing(script, hook_name)
            return False

        logger.debug(f"Running {script.name}.{hook_name} for {identity_name}")
        hook(context, identity_value)
        return True

    def run_lifecycle(self, script: PluginHandle, hook_name: str, context: Any) -> bool:
        """Call a run-level hook such as ``init_platform`` if the script has it."""
        if script.get_hook(hook_name) is None:
            self._record_missing(script, hook_name)
            return False
        logger.debug(f"Running {script.name}.{hook_name}")
        return script.call_hook(hook_name, context)

    def _record_missing(self, script: PluginHandle, hook_name: str) -> None:
        key = (str(script.path), hook_name)
        if key in self._missing:
            return
        self._missing.add(key)
        message = f"Script {script.name} has no {hook_name} hook"
        logger.debug(message)
        if self.report is not None:
            self.report.advise(ErrorKind.MISSING_HOOK, message)
