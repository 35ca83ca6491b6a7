import datetime
import typing

from ..declarative import Relation
from ..exceptions import InvalidPayloadError

ACTION_FILTERS = (
    "all",
    "addMemberToBoard",
    "addMemberToCard",
    "commentCard",
    "createBoard",
    "createCard",
    "createList",
    "moveCardFromBoard",
    "moveCardToBoard",
    "removeMemberFromCard",
    "updateBoard",
    "updateCard",
    "updateList",
)


def parse_timestamp(value: typing.Any) -> datetime.datetime:
    """Parses the ISO-8601 timestamps of the API (``2012-01-10T14:35:12.345Z``)."""
    if isinstance(value, datetime.datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidPayloadError(f"invalid timestamp: {value!r}") from e


def actions_relation() -> Relation:
    return Relation("actions", "Action", filters=ACTION_FILTERS, default_filter="all")
