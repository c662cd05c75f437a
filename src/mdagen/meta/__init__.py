"""Meta-model package.

Modules:
    model: Meta-model entities (MetaModel, MetaClass, Attribute, ...)
    mixins: Mixin registry that lets plugins extend entities
    reader: Model document reader (YAML/JSON)
    validator: Structural model validation
    support: Template support computations installable as mixins
"""

from .mixins import EntityKind, MixinMember, MixinRegistry, get_mixin_registry
from .model import (
    Attribute,
    Datatype,
    MetaClass,
    MetaElement,
    MetaModel,
    ObjectDatatype,
    Stereotype,
)
from .reader import parse_model, read_model
from .validator import find_problems, validate_model

__all__ = [
    # Entities
    "Attribute",
    "Datatype",
    "MetaClass",
    "MetaElement",
    "MetaModel",
    "ObjectDatatype",
    "Stereotype",
    # Mixins
    "EntityKind",
    "MixinMember",
    "MixinRegistry",
    "get_mixin_registry",
    # Reading and validation
    "find_problems",
    "parse_model",
    "read_model",
    "validate_model",
]
