import typing
from collections import OrderedDict

from .deferred import Deferred
from .exceptions import ConfigurationError
from .validation import Rule, ValidationEngine

NO_FILTER = None


def camelize(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class ResourceMemberDescriptor:
    parent: typing.Optional["ResourceDescriptor"] = None
    name: str

    T = typing.TypeVar("T", bound="ResourceMemberDescriptor")

    def bind(self: T, parent: "ResourceDescriptor") -> T:
        if self.parent is not None and self.parent is not parent:
            raise ConfigurationError(
                f"{self.name} is already bound to {self.parent.name}, cannot bind to {parent.name}"
            )
        self.parent = parent
        return self


class AttributeDescriptor(ResourceMemberDescriptor):
    """
    Describes one attribute of a resource type.

    :param str name: the local attribute name.
    :param str api_name: the key of the attribute in the remote payload; defaults to the camel-cased name.
    :param bool read_only: whether local assignment is rejected.
    :param Callable[[Any], Any] transform: applied to every non-null value taken from the remote payload.
    """

    api_name: str
    read_only: bool
    transform: typing.Optional[typing.Callable[[typing.Any], typing.Any]]

    def extract_value(self, payload: typing.Mapping[str, typing.Any]) -> typing.Any:
        value = payload.get(self.api_name)
        if value is not None and self.transform is not None:
            value = self.transform(value)
        return value

    def __repr__(self):
        return f"AttributeDescriptor({self.name!r}, api_name={self.api_name!r}, read_only={self.read_only!r})"

    def __init__(
        self,
        name: str,
        api_name: typing.Optional[str] = None,
        read_only: bool = False,
        transform: typing.Optional[typing.Callable[[typing.Any], typing.Any]] = None,
    ):
        self.name = name
        self.api_name = api_name if api_name is not None else camelize(name)
        self.read_only = read_only
        self.transform = transform


class RelationDescriptor(ResourceMemberDescriptor):
    """
    Describes a to-many relation fetched from ``<owner prefix>/<path>``.

    ``filters`` enumerates the legal values of the ``filter`` option; an empty
    sequence means the relation takes no filter at all.
    """

    _destination: typing.Union["ResourceDescriptor", Deferred["ResourceDescriptor"]]
    path: str
    filters: typing.Tuple[str, ...]
    default_filter: typing.Optional[str]

    @property
    def destination(self) -> "ResourceDescriptor":
        if isinstance(self._destination, Deferred):
            return self._destination()
        else:
            return self._destination

    @property
    def filterable(self) -> bool:
        return bool(self.filters)

    def resolve_filter(
        self, options: typing.Optional[typing.Mapping[str, typing.Any]]
    ) -> typing.Optional[str]:
        """
        Resolves the ``filter`` option against the relation's legal values.

        :param Mapping[str, Any] options: the options given by the caller.
        :return: the filter value to send, or :py:const:`None` for a relation without filters.
        """
        options = dict(options or {})
        value = options.pop("filter", None)
        if options:
            raise ConfigurationError(
                f"unknown option(s) for relation {self.name}: {', '.join(sorted(options))}"
            )
        if not self.filterable:
            if value is not None:
                raise ConfigurationError(f"relation {self.name} does not accept a filter")
            return NO_FILTER
        if value is None:
            return self.default_filter
        value = str(value)
        if value not in self.filters:
            raise ConfigurationError(
                f"invalid filter for relation {self.name}: {value!r} (expected one of {', '.join(self.filters)})"
            )
        return value

    def __repr__(self):
        return f"RelationDescriptor({self.name!r}, filters={self.filters!r})"

    def __init__(
        self,
        destination: typing.Union["ResourceDescriptor", Deferred["ResourceDescriptor"]],
        name: str,
        filters: typing.Iterable[str] = (),
        default_filter: typing.Optional[str] = None,
        path: typing.Optional[str] = None,
    ):
        self._destination = destination
        self.name = name
        self.path = path if path is not None else name
        self.filters = tuple(filters)
        if self.filters:
            if default_filter is None:
                raise ConfigurationError(f"relation {name} declares filters but no default filter")
            if default_filter not in self.filters:
                raise ConfigurationError(
                    f"default filter {default_filter!r} of relation {name} is not one of its filters"
                )
        elif default_filter is not None:
            raise ConfigurationError(f"relation {name} has a default filter but no filters")
        self.default_filter = default_filter


class ResourceDescriptor:
    """
    A :py:class:`ResourceDescriptor` holds the immutable metadata of a resource type.

    :param str name: The name of the resource type.
    :param str path: The path segment of the resource's endpoints (e.g. ``members``).
    :param Iterable[AttributeDescriptor] attributes: The descriptors for the attributes the resource holds.
    :param Iterable[RelationDescriptor] relations: The descriptors for the relations the resource has.
    :param Iterable[Rule] rules: The validation rules, in evaluation order.
    :param str natural_key: The attribute used to address the resource in update and relation requests.
    :param Iterable[Tuple[str, str]] update_mappings: pairs of (payload key, attribute name) sent on update.
    """

    name: str
    path: str
    natural_key: str
    class_: typing.Optional[typing.Type] = None
    validation: ValidationEngine
    update_mappings: typing.Tuple[typing.Tuple[str, str], ...]
    _attributes: typing.MutableMapping[str, AttributeDescriptor]
    _relations: typing.MutableMapping[str, RelationDescriptor]

    @property
    def attributes(self) -> typing.Mapping[str, AttributeDescriptor]:
        """
        The mapping of attribute names to :py:class:`AttributeDescriptor`s, in declaration order.
        """
        return self._attributes

    @property
    def relations(self) -> typing.Mapping[str, RelationDescriptor]:
        """
        The mapping of relation names to :py:class:`RelationDescriptor`s.
        """
        return self._relations

    @property
    def read_only(self) -> typing.FrozenSet[str]:
        return frozenset(name for name, attr in self._attributes.items() if attr.read_only)

    @property
    def update_attributes(self) -> typing.FrozenSet[str]:
        return frozenset(name for _, name in self.update_mappings)

    def attribute(self, name: str) -> AttributeDescriptor:
        try:
            return self._attributes[name]
        except KeyError:
            raise ConfigurationError(f'no attribute named "{name}" in "{self.name}"')

    def relation(self, name: str) -> RelationDescriptor:
        try:
            return self._relations[name]
        except KeyError:
            raise ConfigurationError(f'no relation named "{name}" in "{self.name}"')

    def _check_declared(self, names: typing.Iterable[str], where: str) -> None:
        for name in names:
            if name not in self._attributes:
                raise ConfigurationError(f'{where} of "{self.name}" refers to undeclared attribute "{name}"')

    def __repr__(self):
        return f"ResourceDescriptor({self.name!r})"

    def __init__(
        self,
        name: str,
        path: str,
        attributes: typing.Iterable[AttributeDescriptor] = (),
        relations: typing.Iterable[RelationDescriptor] = (),
        rules: typing.Iterable[Rule] = (),
        natural_key: str = "id",
        update_mappings: typing.Iterable[typing.Tuple[str, str]] = (),
    ) -> None:
        self.name = name
        self.path = path
        self._attributes = OrderedDict()
        for attr in attributes:
            if attr.name in self._attributes:
                raise ConfigurationError(f'attribute "{attr.name}" declared twice in "{name}"')
            self._attributes[attr.name] = attr.bind(self)
        if "id" not in self._attributes:
            raise ConfigurationError(f'"{name}" must declare an "id" attribute')
        self._relations = OrderedDict()
        for rel in relations:
            if rel.name in self._relations or rel.name in self._attributes:
                raise ConfigurationError(f'relation "{rel.name}" clashes with another member of "{name}"')
            self._relations[rel.name] = rel.bind(self)
        self.validation = ValidationEngine(rules)
        for rule in self.validation.rules:
            self._check_declared(rule.attributes, f"{type(rule).__name__} rule")
        self._check_declared([natural_key], "natural key")
        self.natural_key = natural_key
        self.update_mappings = tuple(update_mappings)
        self._check_declared(self.update_attributes, "update mapping")
