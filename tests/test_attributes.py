# tests/test_attributes.py
import pytest

from electrificator_core import ComponentDefinition, ComponentAttributeDefinition, LINK_TYPE, STRING_TYPE
from electrificator_core.parser import RawPort, restore_attributes, restore_parent_container, restore_ports


@pytest.fixture
def breaker_definition(registry) -> ComponentDefinition:
    return registry.find("circuitBreaker")


# --- restore_attributes ---

def test_restore_attributes_keeps_count_and_order(breaker_definition):
    raw = {"rating": "16A", "label": "Main breaker", "poles": 3}
    restored = restore_attributes(raw, breaker_definition)

    assert [a.name for a in restored] == ["rating", "label", "poles"]
    assert [a.value for a in restored] == ["16A", "Main breaker", 3]
    assert len({a.name for a in restored}) == len(raw)


def test_restore_attributes_types_everything_as_string(breaker_definition):
    restored = restore_attributes({"rating": "16A", "poles": 3}, breaker_definition)
    assert all(a.type == STRING_TYPE for a in restored)


def test_restore_attributes_links_declared_definitions(breaker_definition):
    restored = {a.name: a for a in restore_attributes({"rating": "16A", "color": "red"}, breaker_definition)}

    assert restored["rating"].definition is breaker_definition.find_attribute("rating")
    assert restored["rating"].is_declared
    # Undeclared attributes still surface, without a definition.
    assert restored["color"].definition is None
    assert restored["color"].value == "red"


def test_restore_attributes_without_definition_is_always_undeclared():
    restored = restore_attributes({"label": "X", "rating": "10A"}, None)
    assert [a.definition for a in restored] == [None, None]


def test_restore_attributes_empty_map():
    assert restore_attributes({}, None) == []


def test_declared_but_empty_value_is_distinct_from_undeclared(breaker_definition):
    (label,) = restore_attributes({"label": ""}, breaker_definition)
    assert label.value == ""
    assert label.definition is not None


# --- restore_ports ---

def test_restore_ports_skips_unconnected_ports(breaker_definition):
    ports = {
        "in": [RawPort("in1", linked_to="SUPPLY"), RawPort("in2", linked_to=None)],
        "out": [RawPort("out1", linked_to=None)],
    }
    restored = restore_ports(ports, breaker_definition)

    assert [a.name for a in restored] == ["in1"]


def test_restore_ports_values_are_single_element_link_lists(breaker_definition):
    ports = {"in": [RawPort("in1", linked_to="SUPPLY")], "out": [RawPort("out1", linked_to="CB2")]}
    restored = restore_ports(ports, breaker_definition)

    assert [a.value for a in restored] == [["SUPPLY"], ["CB2"]]
    assert all(a.type == LINK_TYPE for a in restored)
    assert restored[0].definition is breaker_definition.find_attribute("in1")


def test_restore_ports_accepts_flat_port_list(breaker_definition):
    ports = [RawPort("a", linked_to="L1"), RawPort("b"), RawPort("c", linked_to="L2")]
    restored = restore_ports(ports, breaker_definition)

    assert [(a.name, a.value) for a in restored] == [("a", ["L1"]), ("c", ["L2"])]
    assert all(a.definition is None for a in restored)


def test_restore_ports_with_no_ports(breaker_definition):
    assert restore_ports({}, breaker_definition) == []
    assert restore_ports([], breaker_definition) == []


# --- restore_parent_container ---

def test_restore_parent_container(breaker_definition):
    parent = restore_parent_container(breaker_definition, "panelA")

    assert parent.name == "parentContainer"
    assert parent.value == "panelA"
    assert parent.type == STRING_TYPE
    assert parent.definition is breaker_definition.find_attribute("parentContainer")


def test_restore_parent_container_is_emitted_for_top_level_nodes():
    definition = ComponentDefinition("thing", (ComponentAttributeDefinition("label", "string"),))
    parent = restore_parent_container(definition, None)

    assert parent.value is None
    assert parent.definition is None
