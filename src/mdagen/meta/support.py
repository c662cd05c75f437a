"""Template support computations shared by platforms.

Plain functions for the derivations most platforms need, plus
:func:`install_template_support`, which registers them as mixins so that
templates can use them as entity properties::

    {% for attribute in class.attributes %}
    self.{{ attribute.identifier_name }} = None
    {% endfor %}

    {% for line in class.comment_lines %}
    # {{ line }}
    {% endfor %}

A platform normally calls ``install_template_support(context["options"])``
from its ``init_platform`` hook.
"""

from typing import Any

from .mixins import MixinRegistry, get_mixin_registry
from .model import DEFAULT_PACKAGE_DELIMITER

DEFAULT_COMMENT_WIDTH = 80
LINE_BREAK_TOKEN = "<p>"


def identifier_name(attribute: Any, prefix: str = "_") -> str:
    """Name to use for an attribute in generated code.

    Read-only and non-public attributes are prefixed; others pass through.
    """
    if attribute.is_read_only or not attribute.is_public:
        return prefix + attribute.name
    return attribute.name


def path_to_identifier(path: Any, delimiter: str = DEFAULT_PACKAGE_DELIMITER, target: str = ".") -> str:
    """Rewrite a package path from the model delimiter to the target namespace delimiter.

    Returns an empty string for anything that is not a string.
    """
    if not isinstance(path, str):
        return ""
    return path.replace(delimiter, target)


def reflow_comment(
    text: str | None,
    width: int = DEFAULT_COMMENT_WIDTH,
    line_break: str = LINE_BREAK_TOKEN,
) -> list[str]:
    """Wrap a free-text comment into lines no longer than ``width``.

    Words are separated by spaces only; a word that does not fit on the
    current line starts a new one, and a word longer than ``width`` gets a
    line of its own. Embedded line breaks are kept inside their word and
    rendered as ``line_break``.

    Returns:
        The wrapped lines; an empty list when there is no comment.
    """
    if not text or not text.strip():
        return []

    lines: list[str] = []
    current: list[str] = []
    length = 0
    for word in text.split(" "):
        if not word:
            continue
        word = word.replace("\r\n", "\n").replace("\n", line_break)
        needed = len(word) if not current else length + 1 + len(word)
        if current and needed > width:
            lines.append(" ".join(current))
            current = []
            needed = len(word)
        current.append(word)
        length = needed

    if current:
        lines.append(" ".join(current))
    return lines


def install_template_support(
    options: Any = None,
    registry: MixinRegistry | None = None,
    prefix: str = "_",
) -> None:
    """Register the support computations as entity mixins.

    Registers:
        attribute.identifier_name
        class.qualified_identifier, class.package_identifier
        object-datatype.qualified_identifier
        element.comment_lines

    Args:
        options: Generation options; ``package_delimiter`` and
            ``comment_width`` are read from it when present.
        registry: Registry to install into (defaults to the process registry)
        prefix: Prefix for private and read-only attribute names
    """
    registry = registry or get_mixin_registry()
    delimiter = getattr(options, "package_delimiter", DEFAULT_PACKAGE_DELIMITER)
    width = getattr(options, "comment_width", DEFAULT_COMMENT_WIDTH)

    def qualified_identifier(self):
        return path_to_identifier(self.class_name_with_path, delimiter)

    def package_identifier(self):
        return path_to_identifier(self.package_name, delimiter)

    def comment_lines(self):
        return reflow_comment(self.comment, width)

    def attribute_identifier_name(self):
        return identifier_name(self, prefix)

    registry.register("attribute", properties={"identifier_name": attribute_identifier_name})
    registry.register("object-datatype", properties=[qualified_identifier])
    registry.register("class", properties=[qualified_identifier, package_identifier])
    registry.register("element", properties=[comment_lines])
