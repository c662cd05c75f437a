"""Render context shared by every template and script of a run."""

from typing import Any

from mdagen.errors import OutputDirectiveError


class RenderContext(dict):
    """Mutable mapping passed to every template evaluation and hook.

    Keys:
        model: The meta-model
        options: GenerationOptions of the run
        output: Output root directory
        class: Current class, or None for project templates
        stereotype: Current stereotype, or None outside the model walk

    Property-mode outputs add one list of bodies per property name.
    """

    def __init__(self, model: Any, options: Any, **extra: Any):
        super().__init__(extra)
        self["model"] = model
        self["options"] = options
        self["output"] = getattr(options, "output", None)
        self["class"] = None
        self["stereotype"] = None

    def set_class(self, meta_class: Any, stereotype: Any = None) -> None:
        self["class"] = meta_class
        self["stereotype"] = stereotype

    def accumulate(self, name: str, body: str) -> list[str]:
        """Append ``body`` to the list stored under ``name``.

        Raises:
            OutputDirectiveError: If ``name`` already holds something other than a list
        """
        values = self.setdefault(name, [])
        if not isinstance(values, list):
            raise OutputDirectiveError(
                f"Cannot accumulate property output into '{name}': "
                f"the context already holds a {type(values).__name__} under that name"
            )
        values.append(body)
        return values
