# tests/test_walker.py
import pytest

from electrificator_core.parser import DocumentLoadError, DocumentStructureError, DocumentWalker


def _walk(listener, document):
    return DocumentWalker(listener).walk(document)


def test_nested_document_order(listener):
    document = {"components": [
        {"name": "panelA", "type": "Container", "children": [
            {"name": "CB1", "type": "circuitBreaker"},
            {"name": "boxB", "type": "Container", "children": [
                {"name": "F1", "type": "fuse"},
            ]},
            {"name": "W1", "type": "electricalLine"},
        ]},
        {"name": "CB2", "type": "circuitBreaker"},
    ]}
    result = _walk(listener, document)

    assert [c.id for c in result.components] == ["CB1", "F1", "boxB", "W1", "panelA", "CB2"]
    parents = {c.id: c.get_attribute_value("parentContainer") for c in result.components}
    assert parents == {"CB1": "panelA", "F1": "boxB", "boxB": "panelA", "W1": "panelA", "panelA": None, "CB2": None}
    assert listener.container_stack == []


def test_flat_document_with_parent_ids(listener):
    document = [
        {"name": "CB1", "type": "circuitBreaker", "parentId": "panelA"},
        {"name": "panelA", "type": "Container"},
        {"name": "CB2", "type": "circuitBreaker", "parentId": "panelA"},
    ]
    result = _walk(listener, document)

    assert [c.id for c in result.components] == ["CB1", "CB2", "panelA"]


def test_explicit_parent_id_wins_over_nesting(listener):
    document = {"components": [
        {"name": "panelA", "type": "Container"},
        {"name": "panelB", "type": "Container", "children": [
            {"name": "CB1", "type": "circuitBreaker", "parentId": "panelA"},
        ]},
    ]}
    result = _walk(listener, document)

    assert [c.id for c in result.components] == ["CB1", "panelA", "panelB"]
    assert result.find_component("CB1").get_attribute_value("parentContainer") == "panelA"


def test_dangling_parent_is_kept_at_top_level_with_warning(listener):
    result = _walk(listener, [{"name": "CB1", "type": "circuitBreaker", "parentId": "ghost"}])

    (component,) = result.components
    assert component.get_attribute_value("parentContainer") == "ghost"
    (warning,) = result.warnings
    assert warning.code == "dangling_parent_reference"
    assert "ghost" in warning.message


def test_containment_cycle_raises(listener):
    document = [
        {"name": "A", "type": "Container", "parentId": "B"},
        {"name": "B", "type": "Container", "parentId": "A"},
    ]
    with pytest.raises(DocumentStructureError, match="cycle"):
        _walk(listener, document)


def test_self_parent_is_a_cycle(listener):
    with pytest.raises(DocumentStructureError):
        _walk(listener, [{"name": "A", "type": "Container", "parentId": "A"}])


def test_duplicate_names_raise(listener):
    document = [{"name": "CB1", "type": "circuitBreaker"}, {"name": "CB1", "type": "fuse"}]
    with pytest.raises(DocumentStructureError) as excinfo:
        _walk(listener, document)
    assert excinfo.value.component_id == "CB1"


@pytest.mark.parametrize("bad_node", [
    {"type": "circuitBreaker"},
    {"name": "CB1"},
    {"name": "CB1", "type": "circuitBreaker", "attributes": ["not", "a", "map"]},
    {"name": "CB1", "type": "circuitBreaker", "ports": "in"},
    "CB1",
])
def test_malformed_nodes_raise(listener, bad_node):
    with pytest.raises(DocumentStructureError):
        _walk(listener, [bad_node])


@pytest.mark.parametrize("document", [42, "text", {"components": {"name": "CB1"}}])
def test_bad_document_root_raises(listener, document):
    with pytest.raises(DocumentLoadError):
        _walk(listener, document)


def test_empty_document(listener):
    result = _walk(listener, {"components": []})
    assert result.components == []
    assert result.warnings == []
