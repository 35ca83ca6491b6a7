from .action import Action  # noqa
from .board import Board  # noqa
from .card import Card  # noqa
from .member import Member  # noqa
from .notification import Notification  # noqa
from .organization import Organization  # noqa
