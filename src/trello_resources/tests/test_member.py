import pytest

from ..exceptions import ReadOnlyAttributeError, ValidationError
from ..resources import Board, Card, Member, Notification, Organization
from .testing import ADA, FakeClient


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def member(client):
    return Member.from_payload(ADA, client)


def test_update_fields(member):
    assert member.id == "5f1"
    assert member.username == "ada"
    assert member.full_name == "Ada Lovelace"
    assert member.avatar_id == "abc123"
    assert member.bio == "math"
    assert member.url == "https://x/ada"


@pytest.mark.parametrize("name", ["id", "username", "avatar_id", "url"])
def test_read_only_attributes(member, name):
    before = member.read_attribute(name)
    with pytest.raises(ReadOnlyAttributeError):
        setattr(member, name, "changed")
    assert member.read_attribute(name) == before


class TestAvatarUrl:
    def test_default_is_large(self, member):
        assert member.avatar_url() == "https://trello-avatars.s3.amazonaws.com/abc123/170.png"

    def test_small(self, member):
        assert member.avatar_url(size="small") == "https://trello-avatars.s3.amazonaws.com/abc123/30.png"

    def test_unknown_size_is_large(self, member):
        assert member.avatar_url(size="huge").endswith("/170.png")


class TestValidation:
    def test_short_full_name(self, member):
        member.full_name = "Ada"
        assert [(v.attribute, v.kind) for v in member.validate()] == [("full_name", "length")]

    def test_long_bio(self, member):
        member.bio = "x" * 16385
        assert [(v.attribute, v.kind) for v in member.validate()] == [("bio", "length")]
        member.bio = "x" * 16384
        assert member.is_valid()

    def test_missing_id_and_username(self):
        member = Member.from_payload(dict(ADA, id=None, username=""))
        assert [(v.attribute, v.kind) for v in member.validate()] == [
            ("id", "presence"),
            ("username", "presence"),
        ]


class TestSave:
    def test_sends_display_name_and_bio_only(self, client, member):
        client.respond("PUT", "/members/ada", dict(ADA, fullName="Augusta Ada King", bio="poetical science"))
        member.full_name = "Augusta Ada King"
        member.bio = "poetical science"

        member.save()

        (call,) = client.calls
        assert call.path == "/members/ada"
        assert call.body == {"displayName": "Augusta Ada King", "bio": "poetical science"}
        assert member.changed == ()
        assert member.previously_changed == frozenset(["full_name", "bio"])
        assert member.full_name == "Augusta Ada King"

    def test_refuses_short_full_name(self, client, member):
        member.full_name = "Ada"
        with pytest.raises(ValidationError):
            member.save()
        assert client.calls == []
        assert member.changed == ("full_name",)


class TestRelations:
    def test_boards(self, client, member):
        client.respond("GET", "/members/ada/boards", [{"id": "b1", "name": "Engine", "desc": "analytical"}])
        (board,) = member.boards()
        assert isinstance(board, Board)
        assert board.description == "analytical"
        member.boards(filter="all")
        assert len(client.calls) == 1
        member.boards(filter="open")
        assert [c.params for c in client.calls] == [{"filter": "all"}, {"filter": "open"}]

    def test_cards_default_open(self, client, member):
        client.respond("GET", "/members/ada/cards", [{"id": "c1", "name": "Note G", "idShort": 7}])
        (card,) = member.cards()
        assert isinstance(card, Card)
        assert card.short_id == 7
        assert client.calls[0].params == {"filter": "open"}

    def test_organizations(self, client, member):
        client.respond("GET", "/members/ada/organizations", [{"id": "o1", "name": "babbage", "displayName": "Babbage & co"}])
        (org,) = member.organizations(filter="members")
        assert isinstance(org, Organization)
        assert org.request_prefix == "/organizations/babbage"

    def test_notifications(self, client, member):
        client.respond(
            "GET",
            "/members/ada/notifications",
            [{"id": "n1", "type": "commentCard", "unread": True, "date": "2012-01-10T14:35:12.345Z"}],
        )
        (notification,) = member.notifications()
        assert isinstance(notification, Notification)
        assert notification.date.year == 2012
        assert notification.date.tzinfo is not None
        assert client.calls[0].params == {}

    def test_actions(self, client, member):
        client.respond("GET", "/members/ada/actions", [{"id": "a1", "type": "createCard"}])
        (action,) = member.actions(filter="createCard")
        assert action.type == "createCard"
