"""Unit tests for the ElementTree node adapter."""

import pytest

from deployrules.errors import DocumentLoadError
from deployrules.nodes import ElementNode, get_attribute, get_child_nodes, load_document, load_document_file


@pytest.fixture
def root():
    return load_document(
        '<ruleset version="1.0+"><rule><id hash="h"/>'
        '<action permission="run"/></rule><!-- c --><rule/></ruleset>'
    )


class TestElementNode:
    """Navigation over a loaded document."""

    def test_name_and_attributes(self, root):
        assert isinstance(root, ElementNode)
        assert root.name == "ruleset"
        assert root.get_attribute("version") == "1.0+"
        assert get_attribute(root, "missing", "fallback") == "fallback"
        assert get_attribute(root, "missing") is None

    def test_child_nodes_in_order(self, root):
        rules = get_child_nodes(root, "rule")
        assert len(rules) == 2
        assert get_child_nodes(root, "id") == []

    def test_first_child_and_next_sibling(self, root):
        rule = root.first_child()
        id_node = rule.first_child()
        action_node = id_node.next_sibling()

        assert id_node.name == "id"
        assert action_node.name == "action"
        assert action_node.get_attribute("permission") == "run"
        assert action_node.next_sibling() is None

    def test_end_of_chain_is_none(self, root):
        empty_rule = get_child_nodes(root, "rule")[1]
        assert empty_rule.first_child() is None
        assert empty_rule.next_sibling() is None
        assert root.next_sibling() is None

    def test_namespaces_stripped_by_default(self):
        root = load_document('<d:ruleset xmlns:d="urn:x"><d:rule/></d:ruleset>')
        assert root.name == "ruleset"
        assert len(root.child_nodes("rule")) == 1

    def test_namespaces_kept_on_request(self):
        root = load_document('<ruleset xmlns="urn:x"/>', strip_namespaces=False)
        assert root.name == "{urn:x}ruleset"


class TestLoadDocument:
    """Turning XML text into nodes."""

    def test_malformed_xml(self):
        with pytest.raises(DocumentLoadError, match="XML parse error"):
            load_document("<ruleset>")

    def test_external_entity_rejected(self):
        content = (
            '<!DOCTYPE ruleset [<!ENTITY ext SYSTEM "file:///etc/passwd">]>'
            '<ruleset>&ext;</ruleset>'
        )
        with pytest.raises(DocumentLoadError, match="Unsafe XML rejected"):
            load_document(content)

    def test_doctype_rejected(self):
        with pytest.raises(DocumentLoadError, match="Unsafe XML rejected"):
            load_document("<!DOCTYPE ruleset><ruleset><rule><id/><action/></rule></ruleset>")

    def test_load_file(self, ruleset_file):
        root = load_document_file(ruleset_file)
        assert len(root.child_nodes("rule")) == 3

    def test_load_file_bad_encoding(self, tmp_path):
        path = tmp_path / "ruleset.xml"
        path.write_bytes(b"<ruleset>\xff\xfe</ruleset>")
        with pytest.raises(DocumentLoadError, match="Encoding error"):
            load_document_file(path)
