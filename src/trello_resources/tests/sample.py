from ..declarative import Attr, Relation
from ..registry import AttributeRegistry
from ..resource import Resource
from ..validation import Length, Presence

sample_registry = AttributeRegistry()


class Widget(Resource):
    class Meta:
        path = "widgets"
        registry = sample_registry
        attributes = [
            "id",
            "handle",
            Attr("title", api_name="displayName"),
            "notes",
            "color",
        ]
        read_only = ["id", "handle"]
        validations = [
            Presence("id", "handle"),
            Length("title", minimum=2),
            Length("color", maximum=10),
        ]
        natural_key = "handle"
        update_mappings = [
            ("name", "title"),
            ("notes", "notes"),
        ]
        relations = [
            Relation("gadgets", "Gadget", filters=["none", "open", "closed", "all"], default_filter="all"),
            Relation("logs", "Gadget", path="history"),
        ]


class Gadget(Resource):
    class Meta:
        registry = sample_registry
        attributes = ["id", "name"]
        read_only = ["id"]


WIDGET = {
    "id": "w1",
    "handle": "sprocket",
    "displayName": "Sprocket",
    "notes": "round",
    "color": "red",
}
