"""Unit tests for rule data models."""

import pytest
from pydantic import ValidationError

from deployrules.models import Action, Certificate, ParseResult, Rule


class TestRule:
    """Rule value objects."""

    def test_defaults_are_unset(self):
        rule = Rule()
        assert rule.certificate is None
        assert rule.location is None
        assert rule.action is None
        assert rule.has_identity is False
        assert rule.has_action is False

    def test_rules_are_immutable(self):
        rule = Rule(location="http://example.com")
        with pytest.raises(ValidationError):
            rule.location = "http://other.example.com"

        action = Action(permission="run")
        with pytest.raises(ValidationError):
            action.permission = "block"

    def test_structural_equality_and_hash(self):
        first = Rule(certificate=Certificate(hash="h"), location="l", action=Action(permission="run", version="1.8"))
        second = Rule(certificate=Certificate(hash="h"), location="l", action=Action(permission="run", version="1.8"))

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_model_dump(self):
        rule = Rule(certificate=Certificate(hash="h"), location=None, action=Action(permission="run", version=None))
        assert rule.model_dump() == {
            "certificate": {"hash": "h"},
            "location": None,
            "action": {"permission": "run", "version": None},
        }


class TestParseResult:
    """Parse outcome wrapper."""

    def test_success_follows_errors(self):
        assert ParseResult(rules=[Rule()]).success is True
        failed = ParseResult(errors=["No <rule> element specified."])
        assert failed.success is False
        assert failed.total_rules == 0
