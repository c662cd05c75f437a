"""The ``##output`` directive.

A template may start its rendered output with one directive line::

    ##output <mode>
    ##output <mode> <path>

``mode`` is one of overwrite, preserve, aggregate, property, ignore
(case-insensitive). Without a directive the output is written in overwrite
mode to a path derived from the template name.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

from mdagen.errors import OutputDirectiveError, UnknownOutputDirectiveError

DIRECTIVE_PREFIX = "##output "


class OutputMode(str, Enum):
    """How a rendered body is routed."""

    OVERWRITE = "overwrite"
    PRESERVE = "preserve"
    AGGREGATE = "aggregate"
    PROPERTY = "property"
    IGNORE = "ignore"

    @classmethod
    def parse(cls, value: str, template: str | None = None) -> "OutputMode":
        """Parse a mode name, ignoring case.

        Raises:
            UnknownOutputDirectiveError: If the name is not a known mode
        """
        try:
            return cls(value.lower())
        except ValueError:
            raise UnknownOutputDirectiveError(value, template) from None


@dataclass(frozen=True)
class OutputDirective:
    mode: OutputMode
    path: str | None = None


def parse_directive(rendered: str, template: str | None = None) -> tuple[OutputDirective | None, str]:
    """Split a rendered template into its directive and body.

    Args:
        rendered: Raw output of the template
        template: Template name, for error messages

    Returns:
        (directive or None, body without the directive line)

    Raises:
        OutputDirectiveError: If the directive has no mode or too many arguments
        UnknownOutputDirectiveError: If the mode is unknown
    """
    if not rendered.startswith(DIRECTIVE_PREFIX):
        return None, rendered

    line, newline, body = rendered.partition("\n")
    args = line.split()[1:]
    if not 1 <= len(args) <= 2:
        raise OutputDirectiveError(
            f"Malformed output directive '{line.strip()}' in template {template}: "
            f"expected a mode and an optional path",
            template=template,
        )

    mode = OutputMode.parse(args[0], template)
    path = args[1] if len(args) == 2 else None
    return OutputDirective(mode, path), body


def default_extension(template_name: str) -> str:
    """Extension for outputs of a class-scoped template.

    The part of the file name from its first dot (a leading dot is not
    counted) up to its last dot: ``Model.dao.js.j2`` gives ``.dao.js``,
    ``Model.j2`` gives ``""``.
    """
    name = PurePath(template_name).name
    first_dot = name.find(".", 1)
    last_dot = name.rfind(".")
    if first_dot < 0 or last_dot <= first_dot:
        return ""
    return name[first_dot:last_dot]


def property_name(output_path: str | PurePath) -> str:
    """Context key a property-mode output accumulates under.

    The file name up to its first dot with the first letter lower-cased:
    ``./gen/Summary`` gives ``summary``, ``./gen/RouteTable.txt`` gives
    ``routeTable``.
    """
    name = PurePath(output_path).name
    dot = name.find(".", 1)
    if dot > 0:
        name = name[:dot]
    return name[:1].lower() + name[1:]
