from ..declarative import Attr
from ..resource import Resource
from ..validation import Presence
from .common import parse_timestamp


class Action(Resource):
    """
    An Action records something a member did; it is never modified locally.
    """

    class Meta:
        attributes = [
            "id",
            "type",
            Attr("date", transform=parse_timestamp),
            "data",
            Attr("member_creator_id", api_name="idMemberCreator"),
        ]
        read_only = ["id", "type", "date", "data", "member_creator_id"]
        validations = [Presence("id", "type")]
