from ..declarative import Attr, Relation
from ..resource import Resource
from ..validation import Length, Presence
from .common import actions_relation


class Board(Resource):
    class Meta:
        attributes = [
            "id",
            "name",
            Attr("description", api_name="desc"),
            "closed",
            "url",
            Attr("organization_id", api_name="idOrganization"),
        ]
        read_only = ["id", "url", "organization_id"]
        validations = [
            Presence("id", "name"),
            Length("name", maximum=16384),
            Length("description", maximum=16384),
        ]
        update_mappings = [
            ("name", "name"),
            ("desc", "description"),
            ("closed", "closed"),
        ]
        relations = [
            Relation("cards", "Card", filters=["none", "open", "closed", "all"], default_filter="open"),
            Relation(
                "members",
                "Member",
                filters=["none", "normal", "owners", "all"],
                default_filter="all",
            ),
            actions_relation(),
        ]
