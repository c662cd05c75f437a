"""Structural validation of a meta-model.

Only checks the invariants the generator itself relies on: names usable as
identifiers and file names, and unambiguous class and attribute names.
"""

from collections import Counter

from mdagen.errors import ModelValidationError
from mdagen.utils.logger import get_logger

from .model import MetaModel

logger = get_logger("model")


def find_problems(model: MetaModel) -> list[str]:
    """Return a human-readable list of validation problems (empty when valid)."""
    problems: list[str] = []

    paths = Counter(meta_class.class_name_with_path for meta_class in model.classes)
    for path, count in paths.items():
        if count > 1:
            problems.append(f"Class '{path}' is defined {count} times")

    for meta_class in model.classes:
        if not meta_class.name.isidentifier():
            problems.append(f"Class name '{meta_class.name}' is not a valid identifier")
        for segment in meta_class.package:
            if not segment.isidentifier():
                problems.append(
                    f"Package segment '{segment}' of class '{meta_class.name}' "
                    f"is not a valid identifier"
                )

        stereotype_names = Counter(meta_class.stereotype_names)
        for name, count in stereotype_names.items():
            if not name.strip():
                problems.append(f"Class '{meta_class.class_name_with_path}' has an empty stereotype")
            elif count > 1:
                problems.append(
                    f"Class '{meta_class.class_name_with_path}' carries stereotype '{name}' "
                    f"{count} times"
                )

        attribute_names = Counter(attribute.name for attribute in meta_class.attributes)
        for attribute in meta_class.attributes:
            if not attribute.name.isidentifier():
                problems.append(
                    f"Attribute '{attribute.name}' of class '{meta_class.class_name_with_path}' "
                    f"is not a valid identifier"
                )
        for name, count in attribute_names.items():
            if count > 1:
                problems.append(
                    f"Attribute '{name}' is defined {count} times in class "
                    f"'{meta_class.class_name_with_path}'"
                )

    return problems


def validate_model(model: MetaModel) -> None:
    """Validate a model.

    Raises:
        ModelValidationError: If any problem is found
    """
    problems = find_problems(model)
    if problems:
        for problem in problems:
            logger.error(problem)
        raise ModelValidationError(
            f"Model '{model.name}' failed validation with {len(problems)} problem(s)", problems
        )

    unstereotyped = [c.class_name_with_path for c in model.classes if not c.stereotypes]
    if unstereotyped:
        logger.debug(f"Classes without stereotypes are not generated: {', '.join(unstereotyped)}")
