import abc
import typing


class TrelloResourcesError(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class ConfigurationError(TrelloResourcesError):
    """
    Raised when an undeclared attribute, relation or filter value is referenced,
    or when a resource type is declared inconsistently.
    """

    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


class ReadOnlyAttributeError(TrelloResourcesError):
    resource: "resource.Resource"
    name: str

    @property
    def message(self) -> str:
        return f'attribute ({self.name}) in "{self.resource.descriptor.name}" is read-only'

    def __init__(self, resource: "resource.Resource", name: str):
        super().__init__(resource, name)
        self.resource = resource
        self.name = name


class ValidationError(TrelloResourcesError):
    resource: "resource.Resource"
    violations: typing.Sequence["validation.Violation"]

    @property
    def message(self) -> str:
        details = "; ".join(str(violation) for violation in self.violations)
        return f'"{self.resource.descriptor.name}" is invalid: {details}'

    def __init__(
        self,
        resource: "resource.Resource",
        violations: typing.Sequence["validation.Violation"],
    ):
        super().__init__(resource, violations)
        self.resource = resource
        self.violations = tuple(violations)


class TransportError(TrelloResourcesError):
    """
    Raised by :py:class:`~trello_resources.client.Client` when a request fails,
    either with a non-success status or because of a network fault, in which
    case ``status_code`` is :py:const:`None`.
    """

    method: str
    url: str
    status_code: typing.Optional[int]
    body: typing.Optional[str]

    @property
    def message(self) -> str:
        if self.status_code is None:
            return f"{self.method} {self.url} failed ({self.__cause__!s})"
        return f"{self.method} {self.url} returned {self.status_code}: {self.body}"

    def __init__(
        self,
        method: str,
        url: str,
        status_code: typing.Optional[int] = None,
        body: typing.Optional[str] = None,
    ):
        super().__init__(method, url, status_code, body)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body


class AuthenticationError(TransportError):
    pass


class ResourceNotFoundError(TransportError):
    pass


class RateLimitError(TransportError):
    pass


class InvalidPayloadError(TrelloResourcesError):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


if typing.TYPE_CHECKING:
    from . import resource  # noqa: E402
    from . import validation  # noqa: E402
