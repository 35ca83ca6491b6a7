import collections.abc
import dataclasses
import typing

from .exceptions import ConfigurationError
from .models import AttributeDescriptor, RelationDescriptor, ResourceDescriptor
from .registry import AttributeRegistry, registry as default_registry
from .validation import Rule


class UnspecifiedType:
    _singleton: typing.ClassVar[typing.Optional["UnspecifiedType"]] = None

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNSPECIFIED"

    def __new__(cls) -> "UnspecifiedType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton


UNSPECIFIED = UnspecifiedType()

T = typing.TypeVar("T")


def maybe_unspecified(maybe: typing.Union[UnspecifiedType, T], default: T) -> T:
    return typing.cast(T, maybe) if maybe is not UNSPECIFIED else default


@dataclasses.dataclass
class Attr:
    name: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    api_name: typing.Union[UnspecifiedType, str] = UNSPECIFIED
    read_only: typing.Union[UnspecifiedType, bool] = UNSPECIFIED
    transform: typing.Optional[typing.Callable[[typing.Any], typing.Any]] = None


@dataclasses.dataclass
class Relation:
    name: str
    destination: str
    filters: typing.Sequence[str] = ()
    default_filter: typing.Optional[str] = None
    path: typing.Optional[str] = None


AttributeDeclaration = typing.Union[
    typing.Sequence[typing.Union[str, Attr]],
    typing.Mapping[str, Attr],
]


@dataclasses.dataclass
class Meta:
    name: str
    path: str
    attributes: typing.Sequence[Attr] = ()
    read_only: typing.Collection[str] = ()
    relations: typing.Sequence[Relation] = ()
    validations: typing.Sequence[Rule] = ()
    natural_key: str = "id"
    update_mappings: typing.Sequence[typing.Tuple[str, str]] = ()
    registry: AttributeRegistry = default_registry


def _normalize_attributes(declared: AttributeDeclaration) -> typing.List[Attr]:
    if isinstance(declared, collections.abc.Mapping):
        return [dataclasses.replace(attr, name=name) for name, attr in declared.items()]
    attributes: typing.List[Attr] = []
    for item in declared:
        if isinstance(item, str):
            attributes.append(Attr(name=item))
        elif isinstance(item, Attr):
            if item.name is UNSPECIFIED:
                raise ConfigurationError(f"attribute declaration {item!r} lacks a name")
            attributes.append(item)
        else:
            raise ConfigurationError(f"every attribute must be either a str or Attr, got {item!r}")
    return attributes


def handle_meta(class_name: str, meta: typing.Type) -> Meta:
    attrs = {k: v for k, v in vars(meta).items() if not k.startswith("__")}
    name = attrs.get("name", class_name)
    return Meta(
        name=name,
        path=attrs.get("path", f"{name.lower()}s"),
        attributes=_normalize_attributes(attrs.get("attributes", ())),
        read_only=frozenset(attrs.get("read_only", ())),
        relations=attrs.get("relations", ()),
        validations=attrs.get("validations", ()),
        natural_key=attrs.get("natural_key", "id"),
        update_mappings=attrs.get("update_mappings", ()),
        registry=attrs.get("registry", default_registry),
    )


def build_descriptor(meta: Meta) -> ResourceDescriptor:
    names = {typing.cast(str, attr.name) for attr in meta.attributes}
    unknown = set(meta.read_only).difference(names)
    if unknown:
        raise ConfigurationError(
            f'read-only attribute(s) {", ".join(sorted(unknown))} of "{meta.name}" are not declared'
        )
    attributes = []
    for attr in meta.attributes:
        name = typing.cast(str, attr.name)
        attributes.append(
            AttributeDescriptor(
                name=name,
                api_name=maybe_unspecified(attr.api_name, None),
                read_only=maybe_unspecified(attr.read_only, name in meta.read_only),
                transform=attr.transform,
            )
        )
    relations = [
        RelationDescriptor(
            destination=meta.registry.deferred(rel.destination),
            name=rel.name,
            filters=rel.filters,
            default_filter=rel.default_filter,
            path=rel.path,
        )
        for rel in meta.relations
    ]
    return ResourceDescriptor(
        name=meta.name,
        path=meta.path,
        attributes=attributes,
        relations=relations,
        rules=meta.validations,
        natural_key=meta.natural_key,
        update_mappings=meta.update_mappings,
    )
