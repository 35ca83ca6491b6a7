from ..declarative import Attr, Relation
from ..resource import Resource
from ..validation import Length, Presence
from .common import actions_relation, parse_timestamp


class Card(Resource):
    class Meta:
        attributes = [
            "id",
            Attr("short_id", api_name="idShort"),
            "name",
            Attr("description", api_name="desc"),
            Attr("due", transform=parse_timestamp),
            "closed",
            "url",
            Attr("board_id", api_name="idBoard"),
            Attr("list_id", api_name="idList"),
            Attr("member_ids", api_name="idMembers"),
            "pos",
        ]
        read_only = ["id", "short_id", "url", "board_id", "member_ids"]
        validations = [
            Presence("id", "name"),
            Length("name", maximum=16384),
            Length("description", maximum=16384),
        ]
        update_mappings = [
            ("name", "name"),
            ("desc", "description"),
            ("closed", "closed"),
            ("idList", "list_id"),
        ]
        relations = [
            Relation("members", "Member"),
            actions_relation(),
        ]
