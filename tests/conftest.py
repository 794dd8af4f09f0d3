# tests/conftest.py
import pytest

from electrificator_core import (
    ComponentAttributeDefinition, ComponentDefinition, DefinitionRegistry,
    ElectrificatorListener, FileInformation,
)
from electrificator_core.parser import RawNode

TEST_FILE_PATH = "schematics/main.json"


def _attributes(*names):
    return tuple(ComponentAttributeDefinition(name=name, type="string") for name in names)


@pytest.fixture
def registry() -> DefinitionRegistry:
    """A small registry covering every restoration category."""
    return DefinitionRegistry.from_definitions([
        ComponentDefinition("Container", _attributes("label", "parentContainer"), is_container=True),
        ComponentDefinition("cabinet", _attributes("label", "parentContainer"), is_container=True),
        ComponentDefinition("circuitBreaker", _attributes("label", "rating", "parentContainer", "in1", "out1")),
        ComponentDefinition("fuse", _attributes("label", "parentContainer")),
        ComponentDefinition("electricalLine", _attributes("label", "parentContainer")),
        ComponentDefinition("controlLine", _attributes("parentContainer")),
        ComponentDefinition("electricalInputInterface", _attributes("label", "parentContainer", "inputName", "inputSource")),
        ComponentDefinition("electricalOutputInterface", _attributes("label", "parentContainer", "outputName", "outputSource")),
        ComponentDefinition("controlInputInterface", _attributes("parentContainer", "inputName", "inputSource")),
        ComponentDefinition("controlOutputInterface", _attributes("parentContainer", "outputName", "outputSource")),
    ])


@pytest.fixture
def listener(registry) -> ElectrificatorListener:
    return ElectrificatorListener(FileInformation(TEST_FILE_PATH), registry)


def make_node(name, type_str, parent_id=None, attributes=None, ports=None) -> RawNode:
    """Builds a raw node the way the walker does, from its document mapping."""
    raw = {"name": name, "type": type_str, "attributes": attributes or {}}
    if parent_id is not None:
        raw["parentId"] = parent_id
    if ports is not None:
        raw["ports"] = ports
    return RawNode.from_dict(raw)


def attribute_map(component):
    return {attribute.name: attribute.value for attribute in component.attributes}
