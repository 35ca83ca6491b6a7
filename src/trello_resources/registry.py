"""
The process-wide table of resource type declarations.

Resource types are registered once, when their classes are created, and the
registry is only read afterwards.
"""
import logging
import typing
from collections import OrderedDict

from .deferred import Deferred
from .exceptions import ConfigurationError
from .models import AttributeDescriptor, ResourceDescriptor

logger = logging.getLogger(__name__)


class AttributeRegistry:
    _descriptors: typing.MutableMapping[str, ResourceDescriptor]

    def register(self, descr: ResourceDescriptor) -> ResourceDescriptor:
        if descr.name in self._descriptors:
            raise ConfigurationError(f'resource type "{descr.name}" is already registered')
        self._descriptors[descr.name] = descr
        logger.debug(
            f"registered resource type {descr.name} with attributes {', '.join(descr.attributes)}"
        )
        return descr

    def register_attributes(
        self,
        type_name: str,
        names: typing.Iterable[str],
        read_only: typing.Iterable[str] = (),
        path: typing.Optional[str] = None,
        **kwargs,
    ) -> ResourceDescriptor:
        """
        Declares the attribute set of a resource type from plain names.

        :param str type_name: the name of the resource type.
        :param Iterable[str] names: the attribute names, in order.
        :param Iterable[str] read_only: the names among ``names`` that are read-only.
        :param str path: the path segment of the type's endpoints; defaults to the lower-cased plural of the name.
        :return: the registered :py:class:`ResourceDescriptor`.
        """
        names = list(names)
        read_only = set(read_only)
        unknown = read_only.difference(names)
        if unknown:
            raise ConfigurationError(
                f'read-only attribute(s) {", ".join(sorted(unknown))} of "{type_name}" are not declared'
            )
        return self.register(
            ResourceDescriptor(
                name=type_name,
                path=path if path is not None else f"{type_name.lower()}s",
                attributes=[AttributeDescriptor(name, read_only=name in read_only) for name in names],
                **kwargs,
            )
        )

    def descriptor(self, type_name: str) -> ResourceDescriptor:
        try:
            return self._descriptors[type_name]
        except KeyError:
            raise ConfigurationError(f'no resource type known as "{type_name}"')

    def deferred(self, type_name: str) -> Deferred[ResourceDescriptor]:
        return Deferred(self.descriptor, type_name)

    def is_read_only(self, type_name: str, name: str) -> bool:
        return self.descriptor(type_name).attribute(name).read_only

    def all_names(self, type_name: str) -> typing.Tuple[str, ...]:
        return tuple(self.descriptor(type_name).attributes)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._descriptors

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._descriptors)

    def __init__(self) -> None:
        self._descriptors = OrderedDict()


registry = AttributeRegistry()
