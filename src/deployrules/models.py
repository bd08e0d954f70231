"""Data models for parsed deployment rules.

Rules are immutable value objects: built once per parse call and handed
to the caller, who owns them from then on.
"""

from pydantic import BaseModel, ConfigDict, Field


class Certificate(BaseModel):
    """Identity fragment of a rule (the ``<id hash=...>`` attribute)."""
    hash: str | None = None

    model_config = ConfigDict(frozen=True)


class Action(BaseModel):
    """Effect fragment of a rule (the ``<action>`` element)."""
    permission: str | None = None  # e.g. run, block, default
    version: str | None = None     # opaque version constraint, e.g. "1.7+"

    model_config = ConfigDict(frozen=True)


class Rule(BaseModel):
    """One entry of a deployment rule set.

    Any of the fragments may be unset when the source ``<rule>`` element
    does not carry them at the expected position.
    """
    certificate: Certificate | None = None
    location: str | None = None
    action: Action | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_identity(self) -> bool:
        """Whether the rule carried an ``<id>`` fragment."""
        return self.certificate is not None

    @property
    def has_action(self) -> bool:
        """Whether the rule carried an ``<action>`` fragment."""
        return self.action is not None


class ParseResult(BaseModel):
    """Outcome of parsing a rule set document without raising.

    Either ``rules`` holds the complete ordered rule list, or ``errors``
    holds the single failure that aborted the parse.
    """
    rules: list[Rule] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    file_path: str | None = None
    parse_time_ms: float = 0.0

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def total_rules(self) -> int:
        return len(self.rules)
