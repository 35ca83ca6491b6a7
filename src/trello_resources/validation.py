"""
Declarative validation rules evaluated against a resource's attribute values.

Rules are declared per resource type and evaluated in declaration order by
:py:class:`ValidationEngine`, which collects every violation instead of
stopping at the first one.
"""
import abc
import collections.abc
import dataclasses
import typing

from .exceptions import ConfigurationError


@dataclasses.dataclass(frozen=True)
class Violation:
    attribute: str
    kind: str
    message: str

    def __str__(self):
        return f"{self.attribute} {self.message}"


class Rule(metaclass=abc.ABCMeta):
    kind: typing.ClassVar[str]
    attributes: typing.Tuple[str, ...]

    @abc.abstractmethod
    def check(self, value: typing.Any) -> typing.Optional[str]:
        """
        Checks a single attribute value.

        :param Any value: the value to check.
        :return: a message describing the problem, or :py:const:`None` if the value is acceptable.
        """
        ...  # pragma: nocover

    def evaluate(self, values: typing.Mapping[str, typing.Any]) -> typing.List[Violation]:
        violations: typing.List[Violation] = []
        for name in self.attributes:
            message = self.check(values.get(name))
            if message is not None:
                violations.append(Violation(name, self.kind, message))
        return violations

    def __init__(self, *attributes: str):
        if not attributes:
            raise ConfigurationError(f"{type(self).__name__} requires at least one attribute")
        self.attributes = attributes


class Presence(Rule):
    kind = "presence"

    def check(self, value: typing.Any) -> typing.Optional[str]:
        if value is None:
            return "can't be blank"
        if isinstance(value, str):
            if not value.strip():
                return "can't be blank"
        elif isinstance(value, collections.abc.Sized) and len(value) == 0:
            return "can't be blank"
        return None

    def __repr__(self):
        return f"Presence({', '.join(repr(a) for a in self.attributes)})"


class Length(Rule):
    """
    Requires the length of the value to lie within the inclusive range
    [``minimum``, ``maximum``].  :py:const:`None` counts as length zero.
    """

    kind = "length"
    minimum: typing.Optional[int]
    maximum: typing.Optional[int]

    def check(self, value: typing.Any) -> typing.Optional[str]:
        length = 0 if value is None else len(value)
        if self.minimum is not None and length < self.minimum:
            return f"is too short (minimum is {self.minimum} characters)"
        if self.maximum is not None and length > self.maximum:
            return f"is too long (maximum is {self.maximum} characters)"
        return None

    def __repr__(self):
        return (
            f"Length({', '.join(repr(a) for a in self.attributes)}, "
            f"minimum={self.minimum!r}, maximum={self.maximum!r})"
        )

    def __init__(
        self,
        *attributes: str,
        minimum: typing.Optional[int] = None,
        maximum: typing.Optional[int] = None,
    ):
        super().__init__(*attributes)
        if minimum is None and maximum is None:
            raise ConfigurationError("Length requires minimum, maximum, or both")
        if minimum is not None and maximum is not None and minimum > maximum:
            raise ConfigurationError(f"minimum ({minimum}) exceeds maximum ({maximum})")
        self.minimum = minimum
        self.maximum = maximum


class ValidationEngine:
    rules: typing.Tuple[Rule, ...]

    @property
    def required(self) -> typing.FrozenSet[str]:
        """
        The names of the attributes that carry a presence rule.
        """
        return frozenset(
            name for rule in self.rules if isinstance(rule, Presence) for name in rule.attributes
        )

    def validate(self, values: typing.Mapping[str, typing.Any]) -> typing.List[Violation]:
        """
        Evaluates every rule against the attribute values.

        :param Mapping[str, Any] values: the attribute values of an instance.
        :return: all the violations found, in rule declaration order.
        """
        violations: typing.List[Violation] = []
        for rule in self.rules:
            violations.extend(rule.evaluate(values))
        return violations

    def __init__(self, rules: typing.Iterable[Rule] = ()):
        self.rules = tuple(rules)
