import pytest

from ..exceptions import ConfigurationError
from ..validation import Length, Presence, ValidationEngine, Violation


class TestPresence:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n", [], {}])
    def test_blank(self, value):
        assert Presence("a").evaluate({"a": value}) == [
            Violation("a", "presence", "can't be blank")
        ]

    @pytest.mark.parametrize("value", ["x", " x ", 0, False, ["a"]])
    def test_present(self, value):
        assert Presence("a").evaluate({"a": value}) == []

    def test_missing_key_is_blank(self):
        assert [v.attribute for v in Presence("a", "b").evaluate({"a": "1"})] == ["b"]

    def test_requires_attributes(self):
        with pytest.raises(ConfigurationError):
            Presence()


class TestLength:
    def test_inclusive_bounds(self):
        rule = Length("a", minimum=2, maximum=4)
        assert rule.evaluate({"a": "ab"}) == []
        assert rule.evaluate({"a": "abcd"}) == []
        assert rule.evaluate({"a": "a"})[0].message == "is too short (minimum is 2 characters)"
        assert rule.evaluate({"a": "abcde"})[0].message == "is too long (maximum is 4 characters)"

    def test_none_counts_as_empty(self):
        assert Length("a", minimum=1).evaluate({"a": None})[0].kind == "length"
        assert Length("a", maximum=1).evaluate({"a": None}) == []

    def test_invalid_declarations(self):
        with pytest.raises(ConfigurationError):
            Length("a")
        with pytest.raises(ConfigurationError):
            Length("a", minimum=5, maximum=1)


class TestValidationEngine:
    def test_collects_all_in_declaration_order(self):
        engine = ValidationEngine(
            [
                Presence("id", "username"),
                Length("full_name", minimum=4),
                Length("bio", maximum=3),
            ]
        )
        violations = engine.validate({"full_name": "Ada", "bio": "long"})
        assert [(v.attribute, v.kind) for v in violations] == [
            ("id", "presence"),
            ("username", "presence"),
            ("full_name", "length"),
            ("bio", "length"),
        ]

    def test_required(self):
        engine = ValidationEngine([Presence("id"), Length("name", maximum=3), Presence("name")])
        assert engine.required == frozenset(["id", "name"])

    def test_violation_str(self):
        assert str(Violation("bio", "length", "is too long")) == "bio is too long"
