"""Platform-independent meta-model.

The meta-model is the in-memory representation of the system being
generated. It is produced by :mod:`mdagen.meta.reader` and is read-only for
the generation pipeline; plugins only decorate it through mixins.

Entity hierarchy and the entity kind each class answers to::

    MetaElement        element
    ├── Stereotype
    ├── Attribute      attribute
    ├── Datatype
    │   └── ObjectDatatype   object-datatype
    └── MetaClass      class
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .mixins import EntityKind, MixinMember, get_mixin_registry

DEFAULT_PACKAGE_DELIMITER = "::"


@dataclass(eq=False)
class MetaElement:
    """Base of every meta-model entity.

    Attribute lookups that find no native member are resolved through the
    mixin registry, so members registered by plugins behave like native ones.
    """

    entity_kind = EntityKind.ELEMENT

    name: str
    comment: str | None = None

    @property
    def has_comment(self) -> bool:
        return bool(self.comment and self.comment.strip())

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails
        if name.startswith("__"):
            raise AttributeError(name)
        member = get_mixin_registry().lookup(type(self), name)
        if member is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        try:
            return member.bind(self)
        except AttributeError as e:
            # Would otherwise read as a missing member and render as undefined
            raise RuntimeError(
                f"Mixin property '{name}' of {type(self).__name__} '{self.name}' failed: {e}"
            ) from e

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Stereotype(MetaElement):
    """A named tag on a class selecting which scripts and templates apply."""


@dataclass(eq=False)
class Datatype(MetaElement):
    """A primitive datatype, referenced by name only."""

    @property
    def is_object(self) -> bool:
        return False


@dataclass(eq=False)
class ObjectDatatype(Datatype):
    """A datatype referring to a class of the model."""

    entity_kind = EntityKind.OBJECT_DATATYPE

    meta_class: "MetaClass | None" = field(default=None, repr=False)

    @property
    def is_object(self) -> bool:
        return True

    @property
    def package_name(self) -> str:
        return self.meta_class.package_name if self.meta_class is not None else ""

    @property
    def class_name_with_path(self) -> str:
        if self.meta_class is not None:
            return self.meta_class.class_name_with_path
        return self.name


@dataclass(eq=False)
class Attribute(MetaElement):
    """An attribute of a class."""

    entity_kind = EntityKind.ATTRIBUTE

    type: Datatype | None = None
    visibility: str = "public"
    is_read_only: bool = False
    owner: "MetaClass | None" = field(default=None, repr=False)

    @property
    def is_public(self) -> bool:
        return self.visibility == "public"

    @property
    def type_name(self) -> str:
        return self.type.name if self.type is not None else ""


@dataclass(eq=False)
class MetaClass(MetaElement):
    """A class of the model.

    The generation pipeline processes a class once per stereotype it carries.
    """

    entity_kind = EntityKind.CLASS

    package: tuple[str, ...] = ()
    stereotypes: list[Stereotype] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    package_delimiter: str = DEFAULT_PACKAGE_DELIMITER

    @property
    def package_name(self) -> str:
        return self.package_delimiter.join(self.package)

    @property
    def package_dir_name(self) -> str:
        return "/".join(self.package)

    @property
    def in_root_package(self) -> bool:
        return not self.package

    @property
    def class_name_with_path(self) -> str:
        if self.in_root_package:
            return self.name
        return f"{self.package_name}{self.package_delimiter}{self.name}"

    @property
    def stereotype_name(self) -> str:
        return self.stereotypes[0].name if self.stereotypes else ""

    @property
    def stereotype_names(self) -> list[str]:
        return [stereotype.name for stereotype in self.stereotypes]

    def has_stereotype(self, name: str) -> bool:
        return name in self.stereotype_names

    @property
    def object_attributes(self) -> list[Attribute]:
        return [a for a in self.attributes if a.type is not None and a.type.is_object]

    @property
    def has_object_attributes(self) -> bool:
        return bool(self.object_attributes)


@dataclass(eq=False)
class MetaModel:
    """Root of the meta-model: an ordered sequence of classes."""

    name: str = "model"
    classes: list[MetaClass] = field(default_factory=list)
    package_delimiter: str = DEFAULT_PACKAGE_DELIMITER

    def find_class(self, name_or_path: str) -> MetaClass | None:
        """Find a class by qualified path, or by simple name when unambiguous."""
        for meta_class in self.classes:
            if meta_class.class_name_with_path == name_or_path:
                return meta_class
        matches = [c for c in self.classes if c.name == name_or_path]
        return matches[0] if len(matches) == 1 else None

    @property
    def stereotype_names(self) -> list[str]:
        """Every stereotype name used in the model, in first-use order."""
        names: list[str] = []
        for meta_class in self.classes:
            for name in meta_class.stereotype_names:
                if name not in names:
                    names.append(name)
        return names

    def mixin(self, spec: Mapping[str, Mapping[str, Iterable[Callable]]]) -> list[MixinMember]:
        """Register a mixin document on the process-wide registry."""
        return get_mixin_registry().mixin(spec)
