from ..declarative import Attr, Relation
from ..resource import Resource
from ..validation import Length, Presence
from .common import actions_relation

AVATAR_URL = "https://trello-avatars.s3.amazonaws.com/{avatar_id}/{size}.png"
AVATAR_SIZES = {"large": 170, "small": 30}


class Member(Resource):
    """
    A Member is a user of the Trello service.

    It can be looked up by either its id or its username, and it is
    addressed by its username in update and relation requests.
    """

    class Meta:
        attributes = [
            "id",
            "username",
            "full_name",
            Attr("avatar_id", api_name="avatarHash"),
            "bio",
            "url",
        ]
        read_only = ["id", "username", "avatar_id", "url"]
        validations = [
            Presence("id", "username"),
            Length("full_name", minimum=4),
            Length("bio", maximum=16384),
        ]
        natural_key = "username"
        # the member endpoint only accepts these two on update
        update_mappings = [
            ("displayName", "full_name"),
            ("bio", "bio"),
        ]
        relations = [
            Relation(
                "boards",
                "Board",
                filters=["none", "members", "organization", "public", "open", "closed", "all"],
                default_filter="all",
            ),
            Relation("cards", "Card", filters=["none", "open", "closed", "all"], default_filter="open"),
            Relation(
                "organizations",
                "Organization",
                filters=["none", "members", "public", "all"],
                default_filter="all",
            ),
            Relation("notifications", "Notification"),
            actions_relation(),
        ]

    def avatar_url(self, size: str = "large") -> str:
        """
        Returns the URL of the member's avatar image.

        :param str size: ``large`` (170x170) or ``small`` (30x30); anything else yields ``large``.
        """
        return AVATAR_URL.format(avatar_id=self.avatar_id, size=AVATAR_SIZES.get(size, 170))
