"""Jinja2 template engine with global helper and partial tables.

Helpers are plain callables usable both as functions and as filters::

    {{ snake_case(class.name) }}  or  {{ class.name | snake_case }}

Partials are reusable template fragments registered by name::

    {% include "file_header" %}

Both tables form one global namespace: registering a name again replaces the
previous definition.
"""

from collections.abc import Callable

from jinja2 import DictLoader, Environment, Template, select_autoescape


class TemplateEngine:
    """Compiles templates and holds the helper/partial namespace.

    Attributes:
        jinja_env: Jinja2 environment used for every template of a run
    """

    def __init__(self):
        self._partials: dict[str, str] = {}
        self._helpers: dict[str, Callable] = {}
        self.jinja_env = Environment(
            loader=DictLoader(self._partials),
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            keep_trailing_newline=True,
        )

    @property
    def helpers(self) -> dict[str, Callable]:
        return dict(self._helpers)

    @property
    def partials(self) -> list[str]:
        return sorted(self._partials)

    def register_helper(self, name: str, helper: Callable) -> None:
        """Register a helper as a global function and as a filter."""
        if not callable(helper):
            raise TypeError(f"Helper '{name}' must be callable, got {type(helper).__name__}")
        self._helpers[name] = helper
        self.jinja_env.globals[name] = helper
        self.jinja_env.filters[name] = helper

    def register_partial(self, name: str, source: str) -> None:
        """Register template source under ``name`` for ``{% include %}``."""
        self._partials[name] = source

    def compile(self, source: str) -> Template:
        """Compile template source."""
        return self.jinja_env.from_string(source)

    def render(self, source: str, context: dict) -> str:
        """Compile and render template source against a context."""
        return self.compile(source).render(**context)
