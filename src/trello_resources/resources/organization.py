from ..declarative import Attr, Relation
from ..resource import Resource
from ..validation import Length, Presence
from .common import actions_relation


class Organization(Resource):
    """
    An Organization groups members and boards; it is addressed by its name.
    """

    class Meta:
        attributes = [
            "id",
            "name",
            "display_name",
            Attr("description", api_name="desc"),
            "url",
            "website",
        ]
        read_only = ["id", "name", "url"]
        validations = [
            Presence("id", "name"),
            Length("display_name", minimum=1),
            Length("description", maximum=16384),
        ]
        natural_key = "name"
        update_mappings = [
            ("displayName", "display_name"),
            ("desc", "description"),
            ("website", "website"),
        ]
        relations = [
            Relation(
                "boards",
                "Board",
                filters=["none", "open", "closed", "members", "organization", "public", "all"],
                default_filter="all",
            ),
            Relation(
                "members",
                "Member",
                filters=["none", "normal", "admins", "owners", "all"],
                default_filter="all",
            ),
            actions_relation(),
        ]
