"""Tests for meta-model entities."""

from mdagen.meta.model import Attribute, Datatype, MetaClass, MetaModel, ObjectDatatype, Stereotype
from tests.conftest import create_test_class


class TestMetaClass:
    """Test derived naming of meta-classes."""

    def test_package_names(self):
        meta_class = MetaClass("Order", package=("orders", "sales"))

        assert meta_class.package_name == "orders::sales"
        assert meta_class.package_dir_name == "orders/sales"
        assert meta_class.class_name_with_path == "orders::sales::Order"
        assert meta_class.in_root_package is False

    def test_root_package(self):
        meta_class = MetaClass("Order")

        assert meta_class.package_name == ""
        assert meta_class.package_dir_name == ""
        assert meta_class.class_name_with_path == "Order"
        assert meta_class.in_root_package is True

    def test_custom_delimiter(self):
        meta_class = MetaClass("Order", package=("orders", "sales"), package_delimiter=".")
        assert meta_class.class_name_with_path == "orders.sales.Order"

    def test_stereotypes(self):
        meta_class = create_test_class(stereotypes=["Entity", "Service"])

        assert meta_class.stereotype_name == "Entity"
        assert meta_class.stereotype_names == ["Entity", "Service"]
        assert meta_class.has_stereotype("Service")
        assert not meta_class.has_stereotype("Controller")
        assert create_test_class(stereotypes=[]).stereotype_name == ""

    def test_object_attributes(self, shop_model):
        order = shop_model.find_class("Order")

        assert [a.name for a in order.object_attributes] == ["customer"]
        assert order.has_object_attributes
        assert not shop_model.find_class("Customer").has_object_attributes

    def test_str_is_name(self):
        assert str(MetaClass("Order")) == "Order"


class TestAttributesAndTypes:
    """Test attributes and datatypes."""

    def test_visibility(self):
        assert Attribute("id").is_public
        assert not Attribute("id", visibility="private").is_public

    def test_type_name(self):
        assert Attribute("id", type=Datatype("int")).type_name == "int"
        assert Attribute("id").type_name == ""

    def test_object_datatype_follows_class(self):
        customer = MetaClass("Customer", package=("crm",))
        datatype = ObjectDatatype("Customer", meta_class=customer)

        assert datatype.is_object
        assert not Datatype("int").is_object
        assert datatype.package_name == "crm"
        assert datatype.class_name_with_path == "crm::Customer"

    def test_comment(self):
        assert Stereotype("Entity", comment="  ").has_comment is False
        assert Stereotype("Entity", comment="Persistent").has_comment is True


class TestMetaModel:
    """Test model-level lookups."""

    def test_find_class_by_path_and_name(self, shop_model):
        assert shop_model.find_class("orders::sales::Order").name == "Order"
        assert shop_model.find_class("Customer").name == "Customer"
        assert shop_model.find_class("Invoice") is None

    def test_find_class_ambiguous_name(self):
        model = MetaModel(
            classes=[MetaClass("Item", package=("a",)), MetaClass("Item", package=("b",))]
        )
        assert model.find_class("Item") is None
        assert model.find_class("b::Item") is model.classes[1]

    def test_stereotype_names_in_first_use_order(self, shop_model):
        assert shop_model.stereotype_names == ["Entity", "Service"]

    def test_mixin_forwards_to_registry(self, mixin_registry, shop_model):
        def plural_name(self):
            return self.name + "s"

        shop_model.mixin({"on_class": {"get": [plural_name]}})

        assert "plural_name" in mixin_registry.members("class")
        assert shop_model.classes[0].plural_name == "Customers"
