"""Model reader.

Loads a model document (YAML, or JSON, which YAML parses as well) into the
meta-model. The document structure is validated with pydantic before any
entity is built; structural problems surface as ModelValidationError.

Example document::

    name: shop
    classes:
      - name: Order
        package: sales::orders
        stereotypes: [Entity]
        comment: An order placed by a customer.
        attributes:
          - {name: id, type: int, read_only: true}
          - {name: customer, type: Customer, visibility: private}
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from mdagen.errors import ModelValidationError
from mdagen.utils.logger import get_logger

from .model import (
    DEFAULT_PACKAGE_DELIMITER,
    Attribute,
    Datatype,
    MetaClass,
    MetaModel,
    ObjectDatatype,
    Stereotype,
)

logger = get_logger("model")


# =============================================================================
# Document Schema
# =============================================================================


class AttributeSpec(BaseModel):
    """An attribute as written in the model document."""

    name: str
    type: str | None = None
    visibility: Literal["public", "protected", "private", "package"] = "public"
    read_only: bool = False
    comment: str | None = None


class ClassSpec(BaseModel):
    """A class as written in the model document."""

    name: str
    package: str = ""
    stereotypes: list[str] = Field(default_factory=list)
    comment: str | None = None
    attributes: list[AttributeSpec] = Field(default_factory=list)

    @field_validator("stereotypes", mode="before")
    @classmethod
    def _single_stereotype(cls, value: Any) -> Any:
        # "stereotypes: Entity" is accepted as shorthand for a one-element list
        if isinstance(value, str):
            return [value]
        return value


class ModelDocument(BaseModel):
    """Top-level model document."""

    name: str = "model"
    classes: list[ClassSpec] = Field(default_factory=list)


# =============================================================================
# Reading
# =============================================================================


def parse_model(data: Any, package_delimiter: str = DEFAULT_PACKAGE_DELIMITER) -> MetaModel:
    """Build a meta-model from an already-parsed document.

    Args:
        data: Mapping loaded from YAML or JSON
        package_delimiter: Delimiter separating package path segments

    Returns:
        The meta-model

    Raises:
        ModelValidationError: If the document does not match the schema
    """
    if data is None:
        data = {}
    try:
        document = ModelDocument.model_validate(data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ModelValidationError("Model document is malformed", problems) from e

    model = MetaModel(name=document.name, package_delimiter=package_delimiter)
    for class_spec in document.classes:
        package = tuple(segment for segment in class_spec.package.split(package_delimiter) if segment)
        meta_class = MetaClass(
            name=class_spec.name,
            comment=class_spec.comment,
            package=package,
            stereotypes=[Stereotype(name=name) for name in class_spec.stereotypes],
            package_delimiter=package_delimiter,
        )
        model.classes.append(meta_class)

    # Types are resolved once every class exists so forward references work
    for class_spec, meta_class in zip(document.classes, model.classes):
        for attribute_spec in class_spec.attributes:
            meta_class.attributes.append(
                Attribute(
                    name=attribute_spec.name,
                    comment=attribute_spec.comment,
                    type=_resolve_type(model, attribute_spec.type),
                    visibility=attribute_spec.visibility,
                    is_read_only=attribute_spec.read_only,
                    owner=meta_class,
                )
            )

    logger.debug(f"Parsed model '{model.name}' with {len(model.classes)} classes")
    return model


def read_model(model_file: str | Path, package_delimiter: str = DEFAULT_PACKAGE_DELIMITER) -> MetaModel:
    """Read a model document from disk.

    Raises:
        FileNotFoundError: If the model file does not exist
        ModelValidationError: If the file is not valid YAML/JSON or does not
            match the document schema
    """
    path = Path(model_file)
    logger.info(f"Reading model from {path}")
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ModelValidationError(f"Model file {path} is not valid YAML/JSON", [str(e)]) from e
    return parse_model(data, package_delimiter)


def _resolve_type(model: MetaModel, type_name: str | None) -> Datatype | None:
    if not type_name:
        return None
    meta_class = model.find_class(type_name)
    if meta_class is not None:
        return ObjectDatatype(name=meta_class.name, meta_class=meta_class)
    return Datatype(name=type_name)
