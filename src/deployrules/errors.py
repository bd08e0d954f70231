"""Structural failures raised while reading a deployment rule set."""

from deployrules.constants import RULE_ELEMENT, RULE_SET_ELEMENT


class RulesetParseError(Exception):
    """Base class for every rule set parse failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRootError(RulesetParseError):
    """Root node is missing or is not a ``<ruleset>`` element."""

    def __init__(self, actual: str | None = None):
        super().__init__(f"Root element is not a <{RULE_SET_ELEMENT}> element.")
        self.actual = actual


class NoRulesPresentError(RulesetParseError):
    """The ``<ruleset>`` element has no ``<rule>`` children."""

    def __init__(self):
        super().__init__(f"No <{RULE_ELEMENT}> element specified.")


class MalformedRuleStructureError(RulesetParseError):
    """A ``<rule>`` element is missing one of its two positional slots.

    Attributes:
        rule_index: Zero-based position of the rule among its siblings
        missing_slot: Name of the slot that could not be reached ("id" or "action")
    """

    def __init__(self, rule_index: int, missing_slot: str):
        super().__init__(
            f"Rule #{rule_index + 1} is malformed: expected a child element "
            f"in the <{missing_slot}> position."
        )
        self.rule_index = rule_index
        self.missing_slot = missing_slot


class DocumentLoadError(Exception):
    """Raw XML text could not be turned into a node tree."""
