import pytest

from ..declarative import Attr, Relation, build_descriptor, handle_meta
from ..exceptions import ConfigurationError
from ..registry import AttributeRegistry
from ..resource import Resource


class TestHandleMeta:
    def test_defaults(self):
        class Meta:
            attributes = ["id", "name"]

        meta = handle_meta("Board", Meta)
        assert meta.name == "Board"
        assert meta.path == "boards"
        assert meta.natural_key == "id"
        assert [a.name for a in meta.attributes] == ["id", "name"]

    def test_mapping_attributes(self):
        class Meta:
            name = "Thing"
            path = "things"
            attributes = {
                "id": Attr(),
                "avatar_id": Attr(api_name="avatarHash", read_only=True),
            }

        meta = handle_meta("Ignored", Meta)
        assert meta.name == "Thing"
        assert meta.path == "things"
        assert [(a.name, a.api_name) for a in meta.attributes][1] == ("avatar_id", "avatarHash")

    def test_rejects_nameless_attr(self):
        class Meta:
            attributes = [Attr(api_name="x")]

        with pytest.raises(ConfigurationError):
            handle_meta("Thing", Meta)

    def test_rejects_other_members(self):
        class Meta:
            attributes = ["id", 1]

        with pytest.raises(ConfigurationError):
            handle_meta("Thing", Meta)


class TestBuildDescriptor:
    def test_read_only_list_and_override(self):
        class Meta:
            registry = AttributeRegistry()
            attributes = ["id", "username", Attr("url", read_only=False)]
            read_only = ["id", "username", "url"]

        descr = build_descriptor(handle_meta("Member", Meta))
        assert descr.read_only == frozenset(["id", "username"])

    def test_read_only_undeclared(self):
        class Meta:
            attributes = ["id"]
            read_only = ["username"]

        with pytest.raises(ConfigurationError):
            build_descriptor(handle_meta("Member", Meta))

    def test_relation_destination_is_deferred(self):
        local_registry = AttributeRegistry()

        class Meta:
            registry = local_registry
            attributes = ["id"]
            relations = [Relation("cards", "Card")]

        descr = build_descriptor(handle_meta("Member", Meta))
        with pytest.raises(ConfigurationError):
            descr.relations["cards"].destination
        card = local_registry.register_attributes("Card", ["id"])
        assert descr.relations["cards"].destination is card


class TestResourceDeclaration:
    def test_registers_class(self):
        local_registry = AttributeRegistry()

        class Label(Resource):
            class Meta:
                registry = local_registry
                attributes = ["id", "color"]

        assert local_registry.descriptor("Label") is Label.descriptor
        assert Label.descriptor.class_ is Label

    def test_duplicate_type(self):
        local_registry = AttributeRegistry()

        class Label(Resource):
            class Meta:
                registry = local_registry
                attributes = ["id"]

        with pytest.raises(ConfigurationError):

            class Label2(Resource):  # noqa: F811
                class Meta:
                    name = "Label"
                    registry = local_registry
                    attributes = ["id"]

    def test_shadowing_resource_member(self):
        with pytest.raises(ConfigurationError):

            class Broken(Resource):
                class Meta:
                    registry = AttributeRegistry()
                    attributes = ["id", "save"]

    def test_abstract_base_cannot_be_instantiated(self):
        class Base(Resource):
            pass

        with pytest.raises(ConfigurationError):
            Base()
