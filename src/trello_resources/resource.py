"""
The generic resource model.

A :py:class:`Resource` holds the attribute values of one remote entity,
tracks the attributes assigned locally since the last sync, guards read-only
attributes, and builds the ``find`` / ``save`` operations on top of
:py:class:`~trello_resources.client.Client`.

Concrete resource types are declared with an inner ``Meta`` class::

    class Member(Resource):
        class Meta:
            attributes = ["id", "username", Attr("full_name"), ...]
            read_only = ["id", "username"]
            validations = [Presence("id", "username")]
            natural_key = "username"
            relations = [Relation("boards", "Board", filters=[...], default_filter="all")]
"""
import collections.abc
import logging
import typing
from collections import OrderedDict

from .association import AssociationProxy
from .client import Client, JSONValue, get_client
from .declarative import build_descriptor, handle_meta
from .exceptions import (
    ConfigurationError,
    InvalidPayloadError,
    ReadOnlyAttributeError,
    ValidationError,
)
from .models import ResourceDescriptor
from .validation import Violation

logger = logging.getLogger(__name__)

R = typing.TypeVar("R", bound="Resource")


class Resource:
    descriptor: typing.ClassVar[ResourceDescriptor]

    _client: typing.Optional[Client]
    _values: typing.Dict[str, typing.Any]
    _changed: "OrderedDict[str, typing.Any]"
    _previous_changes: typing.Dict[str, typing.Tuple[typing.Any, typing.Any]]
    _associations: typing.Dict[str, AssociationProxy]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        meta = cls.__dict__.get("Meta")
        if meta is None:
            # abstract intermediate class
            return
        parsed = handle_meta(cls.__name__, meta)
        descr = build_descriptor(parsed)
        clashes = [
            name
            for name in list(descr.attributes) + list(descr.relations)
            if hasattr(Resource, name)
        ]
        if clashes:
            raise ConfigurationError(
                f'member(s) {", ".join(clashes)} of "{descr.name}" shadow Resource members'
            )
        descr.class_ = cls
        cls.descriptor = parsed.registry.register(descr)

    # attribute access

    def __getattr__(self, name: str) -> typing.Any:
        # only reached when regular lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        descr = getattr(type(self), "descriptor", None)
        if descr is None:
            raise AttributeError(name)
        if name in descr.attributes:
            return self._values[name]
        if name in descr.relations:
            return self.association(name)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: typing.Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        descr = self.descriptor
        if name in descr.relations:
            raise ConfigurationError(f'relation "{name}" of "{descr.name}" cannot be assigned')
        self.write_attribute(name, value)

    def write_attribute(self, name: str, value: typing.Any) -> None:
        """
        Assigns a value to an attribute as a local mutation.

        :param str name: the attribute name.
        :param Any value: the new value.
        :raises ReadOnlyAttributeError: if the attribute is read-only.
        :raises ConfigurationError: if the attribute is not declared.
        """
        attr = self.descriptor.attribute(name)
        if attr.read_only:
            raise ReadOnlyAttributeError(self, name)
        current = self._values[name]
        if name in self._changed:
            if value == self._changed[name]:
                del self._changed[name]
        elif value != current:
            self._changed[name] = current
        self._values[name] = value

    def read_attribute(self, name: str) -> typing.Any:
        self.descriptor.attribute(name)
        return self._values[name]

    @property
    def attributes(self) -> typing.Mapping[str, typing.Any]:
        return dict(self._values)

    # dirty tracking

    @property
    def changed(self) -> typing.Tuple[str, ...]:
        return tuple(self._changed)

    @property
    def changes(self) -> typing.Dict[str, typing.Tuple[typing.Any, typing.Any]]:
        return {name: (old, self._values[name]) for name, old in self._changed.items()}

    @property
    def previously_changed(self) -> typing.FrozenSet[str]:
        return frozenset(self._previous_changes)

    @property
    def previous_changes(self) -> typing.Dict[str, typing.Tuple[typing.Any, typing.Any]]:
        return dict(self._previous_changes)

    def is_changed(self, name: str) -> bool:
        self.descriptor.attribute(name)
        return name in self._changed

    @property
    def persisted(self) -> bool:
        return bool(self._values.get("id"))

    # deserialization

    def update_fields(self: R, fields: typing.Mapping[str, typing.Any]) -> R:
        """
        Replaces the attribute values with those of a payload retrieved from the remote API.

        This is the server-authoritative state: read-only attributes are written
        and nothing is marked as changed.

        :param Mapping[str, Any] fields: a string keyed payload representing the resource.
        :return: the instance itself.
        """
        for name, attr in self.descriptor.attributes.items():
            self._values[name] = attr.extract_value(fields)
        return self

    @classmethod
    def from_payload(
        cls: typing.Type[R],
        payload: typing.Mapping[str, typing.Any],
        client: typing.Optional[Client] = None,
    ) -> R:
        return cls(client=client).update_fields(payload)

    # validation

    def validate(self) -> typing.List[Violation]:
        return self.descriptor.validation.validate(self._values)

    def is_valid(self) -> bool:
        return not self.validate()

    @property
    def errors(self) -> typing.Dict[str, typing.List[str]]:
        errors: typing.Dict[str, typing.List[str]] = {}
        for violation in self.validate():
            errors.setdefault(violation.attribute, []).append(violation.message)
        return errors

    def _check_before_update(self) -> None:
        enforced = self.descriptor.validation.required | self.descriptor.update_attributes
        blocking: typing.List[Violation] = []
        for violation in self.validate():
            if violation.attribute in enforced:
                blocking.append(violation)
            else:
                logger.warning(f"{self!r}: {violation} (not sent, ignored)")
        if blocking:
            raise ValidationError(self, blocking)

    # remote operations

    @property
    def client(self) -> Client:
        return self._client if self._client is not None else get_client()

    @property
    def natural_key(self) -> typing.Any:
        return self._values[self.descriptor.natural_key]

    @property
    def request_prefix(self) -> str:
        if not self.natural_key:
            raise ConfigurationError(
                f"{self.descriptor.name} has no {self.descriptor.natural_key} to address it by"
            )
        return f"/{self.descriptor.path}/{self.natural_key}"

    @classmethod
    def find(cls: typing.Type[R], key: str, client: typing.Optional[Client] = None) -> R:
        """
        Finds a resource by its identifier or by its natural key; the remote
        endpoint tells them apart.

        :param str key: the identifier or natural key.
        :param Client client: the client to use; defaults to :py:func:`get_client`.
        """
        if not key:
            raise ConfigurationError(f'{cls.descriptor.name}.find requires a non-empty key')
        client = client if client is not None else get_client()
        payload = client.get(f"/{cls.descriptor.path}/{key}")
        if not isinstance(payload, collections.abc.Mapping):
            raise InvalidPayloadError(
                f"expected a JSON object for {cls.descriptor.name} {key!r}, got {type(payload).__name__}"
            )
        return cls.from_payload(payload, client)

    def refresh(self: R) -> R:
        if not self.persisted:
            raise ConfigurationError(f"cannot refresh {self!r}: it has no identifier")
        payload = self.client.get(f"/{self.descriptor.path}/{self._values['id']}")
        if not isinstance(payload, collections.abc.Mapping):
            raise InvalidPayloadError(f"expected a JSON object for {self!r}, got {type(payload).__name__}")
        return self.update_fields(payload)

    def save(self: R) -> typing.Optional[R]:
        """
        Saves the local changes.

        Only a persisted instance is sent, as a partial update of the attributes
        listed in the type's update mappings; other changed attributes are not
        transmitted.  An instance without an identifier is not sent at all.

        :raises ValidationError: if a presence-validated or transmitted attribute is invalid.
        """
        persisted = self.persisted
        if persisted:
            if not self.descriptor.update_mappings:
                raise ConfigurationError(f'"{self.descriptor.name}" does not support updates')
            self._check_before_update()

        changed = OrderedDict(self._changed)
        previous_changes = self._previous_changes
        self._previous_changes = self.changes
        self._changed.clear()

        if not persisted:
            return None
        values = dict(self._values)
        try:
            return self._update()
        except Exception:
            self._values.update(values)
            self._changed.update(changed)
            self._previous_changes = previous_changes
            raise

    def _update(self: R) -> R:
        body = {key: self._values[name] for key, name in self.descriptor.update_mappings}
        logger.debug(f"updating {self!r} with {', '.join(body)}")
        payload = self.client.put(self.request_prefix, body)
        if not isinstance(payload, collections.abc.Mapping):
            raise InvalidPayloadError(f"expected a JSON object for {self!r}, got {type(payload).__name__}")
        return self.update_fields(payload)

    # relations

    def association(self, name: str) -> AssociationProxy:
        try:
            return self._associations[name]
        except KeyError:
            pass
        proxy = AssociationProxy(self, self.descriptor.relation(name))
        self._associations[name] = proxy
        return proxy

    def __eq__(self, other):
        if not isinstance(other, Resource):
            return NotImplemented
        return self.descriptor is other.descriptor and self._values.get("id") == other._values.get("id")

    __hash__ = None  # type: ignore

    def __repr__(self):
        return f"<{self.descriptor.name} {self.descriptor.natural_key}={self.natural_key!r}>"

    def __init__(self, client: typing.Optional[Client] = None, **values: typing.Any) -> None:
        if getattr(type(self), "descriptor", None) is None:
            raise ConfigurationError(f"{type(self).__name__} declares no Meta and cannot be instantiated")
        self._client = client
        self._values = {name: None for name in self.descriptor.attributes}
        self._changed = OrderedDict()
        self._previous_changes = {}
        self._associations = {}
        for name, value in values.items():
            self.write_attribute(name, value)


def json_into(
    payload: JSONValue,
    resource_class: typing.Type[R],
    client: typing.Optional[Client] = None,
) -> typing.Union[R, typing.List[R]]:
    """
    Deserializes a decoded JSON payload into new instances of a resource type.

    :param payload: a JSON object, or an array of JSON objects.
    :param resource_class: the resource type to instantiate.
    :param Client client: the client the new instances use for later requests.
    :return: a single instance for an object, a list of instances in payload order for an array.
    """
    if isinstance(payload, collections.abc.Mapping):
        return resource_class.from_payload(payload, client)
    if isinstance(payload, collections.abc.Sequence) and not isinstance(payload, (str, bytes)):
        resources = []
        for i, item in enumerate(payload):
            if not isinstance(item, collections.abc.Mapping):
                raise InvalidPayloadError(
                    f"element {i} of a {resource_class.descriptor.name} collection is not a JSON object"
                )
            resources.append(resource_class.from_payload(item, client))
        logger.debug(f"deserialized {len(resources)} {resource_class.descriptor.name} resource(s)")
        return resources
    raise InvalidPayloadError(
        f"cannot deserialize {type(payload).__name__} into {resource_class.descriptor.name}"
    )
