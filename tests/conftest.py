"""Pytest configuration and fixtures for deployrules tests."""

from typing import Dict, List, Optional

import pytest

from deployrules.nodes import XmlNode
from deployrules.parser import RulesetParser


class FakeNode(XmlNode):
    """In-memory node tree for exercising the parser without XML."""

    def __init__(self, name: str, attributes: Optional[Dict[str, str]] = None,
                 children: Optional[List["FakeNode"]] = None):
        self._name = name
        self.attributes = attributes or {}
        self.children = children or []
        self.parent: Optional["FakeNode"] = None
        for child in self.children:
            child.parent = self

    @property
    def name(self) -> str:
        return self._name

    def get_attribute(self, name, default=None):
        return self.attributes.get(name, default)

    def first_child(self):
        return self.children[0] if self.children else None

    def next_sibling(self):
        if self.parent is None:
            return None
        siblings = self.parent.children
        position = next(i for i, node in enumerate(siblings) if node is self)
        return siblings[position + 1] if position + 1 < len(siblings) else None

    def child_nodes(self, name):
        return [child for child in self.children if child.name == name]


@pytest.fixture
def parser():
    """Basic parser fixture."""
    return RulesetParser()


@pytest.fixture
def fake_node():
    """Factory for in-memory nodes."""
    return FakeNode


@pytest.fixture
def ruleset_xml():
    """Sample rule set with three rules."""
    return """<?xml version="1.0" encoding="utf-8"?>
<ruleset version="1.0+">
  <rule>
    <id hash="794F53C746E2AA77D84B843BE942CAB4309F258FD946D62A6C4CCEAB8E1DB2C6" location="https://example.com/apps" />
    <action permission="run" version="SECURE-1.7" />
  </rule>
  <rule>
    <id location="http://*.intranet.example.com" />
    <action permission="default" />
  </rule>
  <rule>
    <id />
    <action permission="block">
      <message>Blocked by corporate policy.</message>
    </action>
  </rule>
</ruleset>"""


@pytest.fixture
def ruleset_file(tmp_path, ruleset_xml):
    """Sample rule set written to disk."""
    path = tmp_path / "ruleset.xml"
    path.write_text(ruleset_xml, encoding="utf-8")
    return path
