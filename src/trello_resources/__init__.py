from .association import AssociationProxy  # noqa
from .client import Client, get_client, set_client  # noqa
from .config import TrelloConfig, get_config  # noqa
from .declarative import Attr, Relation  # noqa
from .exceptions import (  # noqa
    AuthenticationError,
    ConfigurationError,
    InvalidPayloadError,
    RateLimitError,
    ReadOnlyAttributeError,
    ResourceNotFoundError,
    TransportError,
    TrelloResourcesError,
    ValidationError,
)
from .registry import AttributeRegistry, registry  # noqa
from .resource import Resource, json_into  # noqa
from .validation import Length, Presence, ValidationEngine, Violation  # noqa
from .resources import (  # noqa
    Action,
    Board,
    Card,
    Member,
    Notification,
    Organization,
)
