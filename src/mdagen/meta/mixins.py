"""Mixin registry for meta-model entities.

Platform plugins attach computed properties and methods to meta-model
entities at generation time without touching the entity classes. The
registry is a table keyed by entity kind and member name; every entity's
attribute lookup falls back to it (see ``MetaElement.__getattr__``).

Registrations are additive and the last registration for a (kind, name)
pair wins. Native entity members always shadow registered ones.

Examples:
    Register a computed property on every attribute::

        >>> def identifier_name(self):
        ...     return self.name if self.is_public else "_" + self.name
        >>> get_mixin_registry().register("attribute", properties=[identifier_name])

    Register using the document form plugins usually ship::

        >>> model.mixin({
        ...     "on_class": {"get": [plural_name], "call": [service_path]},
        ...     "on_element": {"get": [comment_lines]},
        ... })
"""

import re
import types
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class EntityKind(Enum):
    """The closed set of entity kinds plugins may extend."""

    ELEMENT = "element"
    ATTRIBUTE = "attribute"
    OBJECT_DATATYPE = "object-datatype"
    CLASS = "class"

    @classmethod
    def parse(cls, value: "EntityKind | str") -> "EntityKind":
        """Parse an entity kind from its name.

        Accepts the canonical value (``object-datatype``) as well as the
        spellings used in mixin documents: ``on_object_datatype``,
        ``onObjectDatatype``, ``ObjectDatatype``.

        Raises:
            ValueError: If the name matches no entity kind
        """
        if isinstance(value, EntityKind):
            return value

        text = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", str(value).strip())
        text = text.lower().replace("-", "_")
        if text.startswith("on_"):
            text = text[3:]
        for kind in cls:
            if kind.value.replace("-", "_") == text:
                return kind
        if text == "meta_element":
            return cls.ELEMENT

        valid = ", ".join(kind.value for kind in cls)
        raise ValueError(f"Unknown entity kind '{value}'. Valid kinds: {valid}")


@dataclass(frozen=True)
class MixinMember:
    """A registered property or method."""

    kind: EntityKind
    name: str
    implementation: Callable[..., Any]
    is_property: bool

    def bind(self, entity: Any) -> Any:
        """Resolve this member against an entity."""
        if self.is_property:
            return self.implementation(entity)
        return types.MethodType(self.implementation, entity)


class MixinRegistry:
    """Capability table of mixin members keyed by entity kind and name."""

    def __init__(self):
        self._table: dict[EntityKind, dict[str, MixinMember]] = {kind: {} for kind in EntityKind}

    def register(
        self,
        kind: EntityKind | str,
        properties: Mapping[str, Callable] | Iterable[Callable] | None = None,
        methods: Mapping[str, Callable] | Iterable[Callable] | None = None,
    ) -> list[MixinMember]:
        """Register computed properties and methods on an entity kind.

        Args:
            kind: Entity kind (or a name accepted by EntityKind.parse)
            properties: Zero-argument accessors, called with the entity as self.
                Either a name -> callable mapping or callables named by __name__.
            methods: Callables bound to the entity when looked up.

        Returns:
            The members registered by this call

        Raises:
            ValueError: If the kind is unknown
            TypeError: If an implementation is not callable
        """
        entity_kind = EntityKind.parse(kind)
        registered = []
        for is_property, specs in ((True, properties), (False, methods)):
            for name, implementation in self._named(specs):
                if not callable(implementation):
                    raise TypeError(
                        f"Mixin '{name}' for {entity_kind.value} must be callable, "
                        f"got {type(implementation).__name__}"
                    )
                member = MixinMember(entity_kind, name, implementation, is_property)
                self._table[entity_kind][name] = member
                registered.append(member)
        return registered

    def mixin(self, spec: Mapping[str, Mapping[str, Iterable[Callable]]]) -> list[MixinMember]:
        """Register a mixin document.

        The document maps entity kind names to sections with ``get`` (computed
        properties) and ``call`` (methods) lists of functions.
        """
        registered = []
        for kind_name, section in spec.items():
            unknown = set(section) - {"get", "call"}
            if unknown:
                raise ValueError(
                    f"Unknown mixin section(s) {sorted(unknown)} for '{kind_name}'. "
                    f"Use 'get' for properties and 'call' for methods."
                )
            registered.extend(
                self.register(kind_name, properties=section.get("get"), methods=section.get("call"))
            )
        return registered

    def lookup(self, entity_type: type, name: str) -> MixinMember | None:
        """Find the member an entity of ``entity_type`` exposes under ``name``.

        The entity's class hierarchy is walked from the most specific kind to
        the least specific one.
        """
        for klass in entity_type.__mro__:
            kind = klass.__dict__.get("entity_kind")
            if kind is None:
                continue
            member = self._table[kind].get(name)
            if member is not None:
                return member
        return None

    def members(self, kind: EntityKind | str) -> dict[str, MixinMember]:
        """Members registered directly on a kind."""
        return dict(self._table[EntityKind.parse(kind)])

    def kinds(self) -> list[EntityKind]:
        """Kinds that have at least one registered member."""
        return [kind for kind, members in self._table.items() if members]

    def __len__(self) -> int:
        return sum(len(members) for members in self._table.values())

    @staticmethod
    def _named(specs) -> Iterable[tuple[str, Callable]]:
        if specs is None:
            return []
        if isinstance(specs, Mapping):
            return list(specs.items())
        return [(getattr(spec, "__name__", repr(spec)), spec) for spec in specs]


_registry = MixinRegistry()


def get_mixin_registry() -> MixinRegistry:
    """Return the process-wide mixin registry."""
    return _registry
