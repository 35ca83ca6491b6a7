import pytest

from ..exceptions import ConfigurationError
from ..models import AttributeDescriptor, ResourceDescriptor
from ..registry import AttributeRegistry
from ..validation import Presence


@pytest.fixture
def target():
    return AttributeRegistry()


def test_register_attributes(target):
    descr = target.register_attributes(
        "Member",
        ["id", "username", "full_name"],
        read_only=["id", "username"],
    )
    assert descr.path == "members"
    assert target.all_names("Member") == ("id", "username", "full_name")
    assert target.is_read_only("Member", "id")
    assert target.is_read_only("Member", "username")
    assert not target.is_read_only("Member", "full_name")
    assert target.descriptor("Member") is descr
    assert "Member" in target
    assert list(target) == ["Member"]


def test_register_twice(target):
    target.register_attributes("Member", ["id"])
    with pytest.raises(ConfigurationError):
        target.register_attributes("Member", ["id"])


def test_undeclared_names(target):
    with pytest.raises(ConfigurationError):
        target.register_attributes("Member", ["id"], read_only=["username"])
    target.register_attributes("Member", ["id"])
    with pytest.raises(ConfigurationError):
        target.is_read_only("Member", "username")
    with pytest.raises(ConfigurationError):
        target.all_names("Board")


def test_deferred_lookup(target):
    deferred = target.deferred("Board")
    assert not deferred.resolved
    descr = target.register(
        ResourceDescriptor(
            "Board",
            "boards",
            attributes=[AttributeDescriptor("id", read_only=True), AttributeDescriptor("name")],
            rules=[Presence("name")],
        )
    )
    assert deferred() is descr
    assert deferred.resolved


def test_deferred_unknown(target):
    with pytest.raises(ConfigurationError):
        target.deferred("Nope")()
