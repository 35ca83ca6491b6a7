import logging
import typing

from .exceptions import ConfigurationError, InvalidPayloadError
from .models import RelationDescriptor

logger = logging.getLogger(__name__)


class AssociationProxy:
    """
    A lazily fetched collection of the resources related to an owning resource.

    One result set is fetched per distinct ``filter`` value and kept for the
    lifetime of the owner; asking again with the same options returns the
    cached sequence without a request.

    :param Resource owner: the resource the relation starts from.
    :param RelationDescriptor relation: the relation this proxy traverses.
    """

    owner: "resource.Resource"
    relation: RelationDescriptor
    _cache: typing.Dict[typing.Optional[str], typing.Tuple["resource.Resource", ...]]

    @property
    def path(self) -> str:
        return f"{self.owner.request_prefix}/{self.relation.path}"

    def fetched(self, options: typing.Optional[typing.Mapping[str, typing.Any]] = None) -> bool:
        return self.relation.resolve_filter(options) in self._cache

    def get(
        self, options: typing.Optional[typing.Mapping[str, typing.Any]] = None
    ) -> typing.Tuple["resource.Resource", ...]:
        """
        Returns the related resources in the order the server sent them.

        :param Mapping[str, Any] options: may hold a ``filter`` key with one of the relation's legal values.
        :raises ConfigurationError: on an unknown option or an illegal filter value.
        """
        filter_ = self.relation.resolve_filter(options)
        try:
            results = self._cache[filter_]
        except KeyError:
            pass
        else:
            logger.debug(f"{self.path} (filter={filter_}) served from cache")
            return results

        from .resource import json_into

        destination = self.relation.destination
        if destination.class_ is None:
            raise ConfigurationError(f'"{destination.name}" has no resource class to deserialize into')
        params = {} if filter_ is None else {"filter": filter_}
        client = self.owner.client
        payload = client.get(self.path, params)
        if not isinstance(payload, list):
            raise InvalidPayloadError(
                f"expected a JSON array from {self.path}, got {type(payload).__name__}"
            )
        results = tuple(json_into(payload, destination.class_, client))
        self._cache[filter_] = results
        return results

    def __call__(self, **options: typing.Any) -> typing.Tuple["resource.Resource", ...]:
        return self.get(options)

    def __repr__(self):
        return f"<AssociationProxy {self.owner!r}.{self.relation.name}>"

    def __init__(self, owner: "resource.Resource", relation: RelationDescriptor):
        self.owner = owner
        self.relation = relation
        self._cache = {}


if typing.TYPE_CHECKING:
    from . import resource  # noqa: E402
