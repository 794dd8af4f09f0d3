# src/electrificator_core/parser/attributes.py
"""
Pure functions turning raw node data into `ComponentAttribute` lists.

Every restored attribute is matched by name against the attributes declared by the
component's definition. Undeclared attributes are kept with `definition=None`, and
a missing definition (unknown component type) makes every attribute undeclared.
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional

from ..data_structures import ComponentAttribute, LINK_TYPE, STRING_TYPE
from ..definitions.models import ComponentAttributeDefinition, ComponentDefinition
from .raw_data import RawPort, RawPorts

logger = logging.getLogger(__name__)

PARENT_CONTAINER_ATTRIBUTE = "parentContainer"


def find_attribute_definition(
    definition: Optional[ComponentDefinition], name: str
) -> Optional[ComponentAttributeDefinition]:
    if definition is None:
        return None
    return definition.find_attribute(name)


def restore_attributes(
    raw_attributes: Mapping[str, Any], definition: Optional[ComponentDefinition]
) -> List[ComponentAttribute]:
    """One string-typed attribute per raw key, in the raw map's insertion order."""
    return [
        ComponentAttribute(
            name=key,
            value=value,
            type=STRING_TYPE,
            definition=find_attribute_definition(definition, key),
        )
        for key, value in raw_attributes.items()
    ]


def iter_ports(raw_ports: RawPorts) -> Iterable[RawPort]:
    """Every port of a grouped or flat port collection, in document order."""
    if isinstance(raw_ports, Mapping):
        for port_group in raw_ports.values():
            yield from port_group
    else:
        yield from raw_ports


def restore_ports(
    raw_ports: RawPorts, definition: Optional[ComponentDefinition]
) -> List[ComponentAttribute]:
    """
    One link attribute per connected port, valued `[linked_to]`.
    Unconnected ports have nothing to display and contribute no attribute.
    """
    restored = []
    for port in iter_ports(raw_ports):
        if not port.is_connected:
            continue
        restored.append(ComponentAttribute(
            name=port.name,
            value=[port.linked_to],
            type=LINK_TYPE,
            definition=find_attribute_definition(definition, port.name),
        ))
    return restored


def restore_parent_container(
    definition: Optional[ComponentDefinition], parent_id: Optional[str]
) -> ComponentAttribute:
    # The parent is not looked up among the open containers; the walker reports
    # parents that are missing from the document.
    return ComponentAttribute(
        name=PARENT_CONTAINER_ATTRIBUTE,
        value=parent_id,
        type=STRING_TYPE,
        definition=find_attribute_definition(definition, PARENT_CONTAINER_ATTRIBUTE),
    )
