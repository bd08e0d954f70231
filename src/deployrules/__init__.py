"""deployrules - Deployment rule set parser for signed-code launchers.

deployrules turns a ``ruleset.xml`` deployment rule set document into an
ordered list of typed rules (certificate identity, location and action)
for consumption by a launcher's trust decision logic.

Basic usage:
    from deployrules import RulesetParser

    parser = RulesetParser()
    result = parser.parse_file(Path("ruleset.xml"))

    if result.success:
        for rule in result.rules:
            print(rule.location, rule.action)
"""

__version__ = "0.1.0"
__author__ = "deployrules contributors"
__description__ = "Deployment rule set parser and rule data model"

from deployrules.config import DeployRulesConfig
from deployrules.errors import (
    DocumentLoadError,
    InvalidRootError,
    MalformedRuleStructureError,
    NoRulesPresentError,
    RulesetParseError,
)
from deployrules.models import Action, Certificate, ParseResult, Rule
from deployrules.netutil import is_localhost_or_loopback, is_url_localhost_or_loopback
from deployrules.nodes import ElementNode, XmlNode, load_document, load_document_file
from deployrules.parser import RulesetParser, parse_rules

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "DeployRulesConfig",
    # Data model
    "Rule",
    "Certificate",
    "Action",
    "ParseResult",
    # Parsing
    "RulesetParser",
    "parse_rules",
    "XmlNode",
    "ElementNode",
    "load_document",
    "load_document_file",
    # Errors
    "RulesetParseError",
    "InvalidRootError",
    "NoRulesPresentError",
    "MalformedRuleStructureError",
    "DocumentLoadError",
    # Network helpers
    "is_localhost_or_loopback",
    "is_url_localhost_or_loopback",
]
