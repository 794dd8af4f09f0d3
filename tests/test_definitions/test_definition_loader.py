# tests/test_definitions/test_definition_loader.py
import json

import pytest

from electrificator_core import DefinitionRegistryError, load_default_definitions, load_definitions
from electrificator_core.definitions import DefinitionLoadError, DefinitionSchemaError
from electrificator_core.parser import NODE_CATEGORIES

VALID_REGISTRY = """
definitions:
  - type: Container
    isContainer: true
    attributes:
      - {name: label}
      - {name: parentContainer, type: Reference, required: true}
  - type: circuitBreaker
    description: Protects a circuit against overcurrent.
    attributes:
      - {name: rating, type: string, rules: [{pattern: "^[0-9]+A$"}]}
"""


def test_load_definitions_from_text():
    registry = load_definitions(VALID_REGISTRY, from_text=True)

    assert registry.types == ["Container", "circuitBreaker"]
    container = registry.find("Container")
    assert container.is_container
    assert container.find_attribute("label").type == "string"
    assert container.find_attribute("parentContainer").required

    breaker = registry.find("circuitBreaker")
    assert not breaker.is_container
    assert breaker.description.startswith("Protects")
    assert breaker.find_attribute("rating").rules == ({"pattern": "^[0-9]+A$"},)
    assert breaker.find_attribute("missing") is None


def test_load_definitions_from_file(tmp_path):
    path = tmp_path / "registry.yaml"
    path.write_text(VALID_REGISTRY)

    registry = load_definitions(path)
    assert len(registry) == 2
    assert "circuitBreaker" in registry


def test_lookup_of_unknown_type_returns_none():
    registry = load_definitions(VALID_REGISTRY, from_text=True)
    assert registry.find("transformer") is None


def test_missing_registry_file(tmp_path):
    with pytest.raises(DefinitionRegistryError) as excinfo:
        load_definitions(tmp_path / "nope.yaml")
    assert isinstance(excinfo.value.__cause__, DefinitionLoadError)


@pytest.mark.parametrize("text", ["definitions: [", "", "- just\n- a list\n"])
def test_unreadable_registry_text(text):
    with pytest.raises(DefinitionRegistryError) as excinfo:
        load_definitions(text, from_text=True)
    assert isinstance(excinfo.value.__cause__, DefinitionLoadError)


@pytest.mark.parametrize("text", [
    "definitions: []",
    "definitions:\n  - {type: circuit-breaker}\n",
    "definitions:\n  - {type: fuse}\n  - {type: fuse}\n",
    "definitions:\n  - {type: fuse, attributes: [{name: a}, {name: a}]}\n",
    "definitions:\n  - {isContainer: true}\n",
    "definitions:\n  - {type: fuse}\nextra: 1\n",
])
def test_structurally_invalid_registry(text):
    with pytest.raises(DefinitionRegistryError) as excinfo:
        load_definitions(text, from_text=True)
    cause = excinfo.value.__cause__
    assert isinstance(cause, DefinitionSchemaError)
    assert cause.errors
    assert "Definition Registry Schema Error" in str(excinfo.value)


def test_default_registry_covers_every_node_type():
    registry = load_default_definitions()

    for type_str in NODE_CATEGORIES:
        if type_str in ("electricalInterface", "controlInterface"):
            continue
        assert type_str in registry, type_str
    for interface_type in ("electricalInputInterface", "electricalOutputInterface",
                           "controlInputInterface", "controlOutputInterface"):
        assert interface_type in registry

    assert registry.find("Container").is_container
    assert registry.find("fuse").find_attribute("parentContainer") is not None
    assert registry.find("electricalOutputInterface").find_attribute("outputName").required


def test_tab_indented_json_registry_file(tmp_path):
    path = tmp_path / "definitions.json"
    path.write_text(
        json.dumps({"definitions": [{"type": "fuse", "description": "\U0001F50C plug fuse"}]}, indent="\t"),
        encoding="utf-8",
    )

    registry = load_definitions(path)
    assert registry.find("fuse").description == "\U0001F50C plug fuse"


def test_non_utf8_registry_file(tmp_path):
    path = tmp_path / "definitions.yaml"
    path.write_bytes(b"\xff\xfedefinitions: []\n")

    with pytest.raises(DefinitionRegistryError) as excinfo:
        load_definitions(path)
    assert isinstance(excinfo.value.__cause__, DefinitionLoadError)
