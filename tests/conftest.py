"""
Pytest configuration and shared test utilities.

This module provides shared fixtures and factories for all mdagen tests.
"""

from pathlib import Path

import pytest

from mdagen.meta import mixins
from mdagen.meta.model import Attribute, Datatype, MetaClass, MetaModel, ObjectDatatype, Stereotype
from mdagen.utils import config

# ===================================================================
# Isolation
# ===================================================================


@pytest.fixture(autouse=True)
def mixin_registry(monkeypatch):
    """Give every test its own mixin registry."""
    registry = mixins.MixinRegistry()
    monkeypatch.setattr(mixins, "_registry", registry)
    return registry


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep tests independent of any mdagen.yml or MDAGEN_CONFIG on the machine."""
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)
    config.reset_config()
    yield
    config.reset_config()


# ===================================================================
# Factories
# ===================================================================


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create files below ``root`` from a relative path -> content mapping.

    Examples:
        write_files(tmp_path / "platform", {
            "Entity/Model.py.j2": "class {{ class.name }}: pass\\n",
            "Entity/alias.json": '"Other"',
        })
    """
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def create_test_class(
    name: str = "Order",
    package: tuple[str, ...] = ("orders",),
    stereotypes: list[str] | None = None,
    attributes: list[Attribute] | None = None,
    comment: str | None = None,
) -> MetaClass:
    """Factory for meta-classes with sensible defaults."""
    meta_class = MetaClass(
        name=name,
        comment=comment,
        package=package,
        stereotypes=[Stereotype(s) for s in (stereotypes if stereotypes is not None else ["Entity"])],
    )
    for attribute in attributes or []:
        attribute.owner = meta_class
        meta_class.attributes.append(attribute)
    return meta_class


def create_test_model(*classes: MetaClass, name: str = "shop") -> MetaModel:
    """Factory for a model; defaults to one ``orders::Order`` entity."""
    return MetaModel(name=name, classes=list(classes) or [create_test_class()])


@pytest.fixture
def shop_model() -> MetaModel:
    """Customer and Order entities, Order referencing Customer."""
    customer = create_test_class(
        "Customer",
        package=("crm",),
        attributes=[Attribute("name", type=Datatype("string"))],
        comment="Someone who buys things.",
    )
    order = create_test_class(
        "Order",
        package=("orders", "sales"),
        stereotypes=["Entity", "Service"],
        attributes=[
            Attribute("id", type=Datatype("int"), is_read_only=True),
            Attribute(
                "customer",
                type=ObjectDatatype("Customer", meta_class=customer),
                visibility="private",
            ),
            Attribute("total", type=Datatype("decimal")),
        ],
    )
    return MetaModel(name="shop", classes=[customer, order])


@pytest.fixture
def platform_dir(tmp_path) -> Path:
    """An empty platform directory."""
    path = tmp_path / "platform"
    path.mkdir()
    return path
