"""Deployment rule set parser.

Turns a ``<ruleset>`` node tree into an ordered list of ``Rule`` objects.

Each ``<rule>`` is read through two fixed positional slots: the first
child element is the identity slot (``<id>``), and its next sibling is
the action slot (``<action>``). A slot whose element has another name is
left unset. A rule that does not even have elements in both positions is
rejected with ``MalformedRuleStructureError``.

See: https://docs.oracle.com/javase/8/docs/technotes/guides/deploy/deployment_rules.html
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

from deployrules.config import ParserConfig
from deployrules.constants import (
    ACTION_ELEMENT,
    ACTION_SLOT,
    HASH_ATTRIBUTE,
    ID_ELEMENT,
    ID_SLOT,
    LOCATION_ATTRIBUTE,
    PERMISSION_ATTRIBUTE,
    RULE_ELEMENT,
    RULE_SET_ELEMENT,
    VERSION_ATTRIBUTE,
)
from deployrules.errors import (
    DocumentLoadError,
    InvalidRootError,
    MalformedRuleStructureError,
    NoRulesPresentError,
    RulesetParseError,
)
from deployrules.models import Action, Certificate, ParseResult, Rule
from deployrules.nodes import XmlNode, get_attribute, get_child_nodes, load_document, load_document_file

logger = logging.getLogger(__name__)


class RulesetParser:
    """Parser for deployment rule set documents.

    The parser keeps no state between calls; one instance can be shared
    freely.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        """Initialize parser with configuration.

        Args:
            config: Parser configuration, defaults used if None
        """
        self.config = config or ParserConfig()

    def get_rules(self, root: Optional[XmlNode]) -> List[Rule]:
        """Extract all rules from a rule set document.

        The ``version`` attribute of the ``<ruleset>`` element is ignored:
        the schema has a single frozen version.

        Args:
            root: Root node of the document

        Returns:
            Rules in document order

        Raises:
            InvalidRootError: If root is None or not a <ruleset> element
            NoRulesPresentError: If the rule set has no <rule> element
            MalformedRuleStructureError: If a <rule> lacks one of its two slots
        """
        if root is None or root.name != RULE_SET_ELEMENT:
            raise InvalidRootError(None if root is None else root.name)

        rule_nodes = get_child_nodes(root, RULE_ELEMENT)
        if not rule_nodes:
            raise NoRulesPresentError()

        logger.debug("Found %d <%s> elements", len(rule_nodes), RULE_ELEMENT)
        return [self._get_rule(node, index) for index, node in enumerate(rule_nodes)]

    def parse_content(self, xml_content: str, file_path: str = "<string>") -> ParseResult:
        """Parse a rule set document from a string.

        Args:
            xml_content: Raw XML content
            file_path: Virtual file path for error reporting

        Returns:
            ParseResult with the rules or the failure message
        """
        start_time = time.time()
        try:
            root = load_document(xml_content, strip_namespaces=self.config.ignore_namespaces)
            result = self._collect(root, file_path)
        except DocumentLoadError as e:
            result = ParseResult(file_path=file_path, errors=[str(e)])
        result.parse_time_ms = (time.time() - start_time) * 1000
        return result

    def parse_file(self, file_path: Path) -> ParseResult:
        """Parse a rule set document from disk.

        Args:
            file_path: Path to ruleset.xml

        Returns:
            ParseResult with the rules or the failure message
        """
        start_time = time.time()
        try:
            root = load_document_file(file_path, strip_namespaces=self.config.ignore_namespaces)
            result = self._collect(root, str(file_path))
        except DocumentLoadError as e:
            result = ParseResult(file_path=str(file_path), errors=[str(e)])
        result.parse_time_ms = (time.time() - start_time) * 1000
        return result

    def _collect(self, root: XmlNode, file_path: str) -> ParseResult:
        try:
            return ParseResult(file_path=file_path, rules=self.get_rules(root))
        except RulesetParseError as e:
            return ParseResult(file_path=file_path, errors=[e.message])

    def _get_rule(self, node: XmlNode, index: int) -> Rule:
        """Read one <rule> element through its id and action slots."""
        certificate = None
        location = None
        action = None

        potential_id_part = node.first_child()
        if potential_id_part is None:
            raise MalformedRuleStructureError(index, ID_SLOT)

        if potential_id_part.name == ID_ELEMENT:
            certificate = Certificate(hash=get_attribute(potential_id_part, HASH_ATTRIBUTE, None))
            location = get_attribute(potential_id_part, LOCATION_ATTRIBUTE, None)

        # The action slot is the sibling of the first child, whatever it was
        potential_action_part = potential_id_part.next_sibling()
        if potential_action_part is None:
            raise MalformedRuleStructureError(index, ACTION_SLOT)

        if potential_action_part.name == ACTION_ELEMENT:
            action = Action(
                permission=get_attribute(potential_action_part, PERMISSION_ATTRIBUTE, None),
                version=get_attribute(potential_action_part, VERSION_ATTRIBUTE, None),
            )

        logger.debug(
            "Rule #%d: id=%s action=%s",
            index + 1, certificate is not None, action is not None,
        )
        return Rule(certificate=certificate, location=location, action=action)


def parse_rules(root: Optional[XmlNode], config: Optional[ParserConfig] = None) -> List[Rule]:
    """Convenience function to extract rules from a root node.

    Raises:
        RulesetParseError: On any structural violation
    """
    return RulesetParser(config).get_rules(root)
