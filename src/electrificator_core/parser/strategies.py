# src/electrificator_core/parser/strategies.py
"""
Restoration strategies: each turns one raw node into (at most) one component.

Strategies share a signature, `strategy(session, node)`, so the listener can pick
them from a lookup table. All state they touch lives in the `ParseSession`.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Set

from ..data_structures import ComponentAttribute, STRING_TYPE
from ..issues import ParseIssueCode
from .attributes import (
    find_attribute_definition,
    restore_attributes,
    restore_parent_container,
    restore_ports,
)
from .raw_data import INPUT_PORTS, OUTPUT_PORTS, RawNode

if TYPE_CHECKING:
    from .listener import ParseSession

logger = logging.getLogger(__name__)

RestorationStrategy = Callable[["ParseSession", RawNode], None]

ROLE_ATTRIBUTE = "role"
INPUT_ROLE = "input"
OUTPUT_ROLE = "output"


def assemble_attributes(
    session: ParseSession,
    node: RawNode,
    attributes: List[ComponentAttribute],
    ports: List[ComponentAttribute],
    derived: List[ComponentAttribute],
) -> List[ComponentAttribute]:
    """
    Joins raw attributes, port links and derived attributes, keeping names unique.

    Derived attributes (`parentContainer`, interface names and sources) always win:
    raw attributes or ports using one of their names are dropped. A port wins over a
    raw attribute of the same name, and the first of several same-named ports is kept.
    Every dropped entry is reported as a warning.
    """
    reserved = {attribute.name for attribute in derived}

    kept_ports: List[ComponentAttribute] = []
    port_names: Set[str] = set()
    for port in ports:
        if port.name in reserved:
            session.add_warning(ParseIssueCode.RESERVED_ATTRIBUTE_DROPPED, component_id=node.name,
                                attribute_name=port.name, origin="port")
        elif port.name in port_names:
            session.add_warning(ParseIssueCode.DUPLICATE_PORT_NAME, component_id=node.name, port_name=port.name)
        else:
            port_names.add(port.name)
            kept_ports.append(port)

    kept_attributes: List[ComponentAttribute] = []
    for attribute in attributes:
        if attribute.name in reserved:
            session.add_warning(ParseIssueCode.RESERVED_ATTRIBUTE_DROPPED, component_id=node.name,
                                attribute_name=attribute.name, origin="attribute")
        elif attribute.name in port_names:
            session.add_warning(ParseIssueCode.PORT_ATTRIBUTE_CONFLICT, component_id=node.name,
                                attribute_name=attribute.name)
        else:
            kept_attributes.append(attribute)

    return kept_attributes + kept_ports + derived


def restore_container(session: ParseSession, node: RawNode) -> None:
    """Builds the container and leaves it open on the stack until its node is exited."""
    definition = session.find_definition(node.type)
    attributes = assemble_attributes(
        session, node,
        restore_attributes(node.attributes, definition),
        [],
        [restore_parent_container(definition, node.parent_id)],
    )
    session.push_container(session.create_component(node.name, definition, attributes))


def restore_dipole(session: ParseSession, node: RawNode) -> None:
    """
    Two-terminal devices (breakers, contactors, fuses, ...): attributes, connected
    ports and parent container, emitted right away.
    """
    definition = session.find_definition(node.type)
    attributes = assemble_attributes(
        session, node,
        restore_attributes(node.attributes, definition),
        restore_ports(node.ports, definition),
        [restore_parent_container(definition, node.parent_id)],
    )
    session.emit(session.create_component(node.name, definition, attributes))


def restore_line(session: ParseSession, node: RawNode) -> None:
    """Lines carry no ports of their own."""
    definition = session.find_definition(node.type)
    attributes = assemble_attributes(
        session, node,
        restore_attributes(node.attributes, definition),
        [],
        [restore_parent_container(definition, node.parent_id)],
    )
    session.emit(session.create_component(node.name, definition, attributes))


class InterfaceStrategy:
    """
    Restores a directional interface node.

    Interface nodes look the same whatever their role, but an `input` role resolves
    to `input_type` with `inputName`/`inputSource` attributes, and an `output` role
    to `output_type` with `outputName`/`outputSource`. The connected port of the
    matching direction names the interface in the other document (its link) and
    where the signal comes from (its source); that port is consumed and not restored
    as a plain port attribute.

    When several ports of that direction are connected, the last one in document
    order is kept and an `interface_multiple_links` warning is recorded.
    """

    def __init__(self, input_type: str, output_type: str):
        self.input_type = input_type
        self.output_type = output_type

    def __call__(self, session: ParseSession, node: RawNode) -> None:
        role = node.attributes.get(ROLE_ATTRIBUTE)
        if role == INPUT_ROLE:
            interface_type, direction, prefix = self.input_type, INPUT_PORTS, "input"
        elif role == OUTPUT_ROLE:
            interface_type, direction, prefix = self.output_type, OUTPUT_PORTS, "output"
        else:
            session.add_warning(ParseIssueCode.INVALID_INTERFACE_ROLE, role=role, component_id=node.name)
            return

        linked_name, linked_source = self._consume_link(session, node, direction)

        definition = session.find_definition(interface_type)
        node.attributes.pop(ROLE_ATTRIBUTE)

        attributes = assemble_attributes(
            session, node,
            restore_attributes(node.attributes, definition),
            restore_ports(node.ports, definition),
            [
                restore_parent_container(definition, node.parent_id),
                _string_attribute(definition, f"{prefix}Name", linked_name),
                _string_attribute(definition, f"{prefix}Source", linked_source),
            ],
        )

        session.emit(session.create_component(node.name, definition, attributes))

    def _consume_link(self, session: ParseSession, node: RawNode, direction: str):
        connected = [port for port in node.ports_in(direction) if port.is_connected]
        node.clear_ports(direction)
        if not connected:
            logger.debug(f"Interface '{node.name}' has no connected '{direction}' port.")
            return "", ""

        kept = connected[-1]
        if len(connected) > 1:
            session.add_warning(
                ParseIssueCode.INTERFACE_MULTIPLE_LINKS,
                component_id=node.name,
                link_count=len(connected),
                direction=direction,
                kept_link=kept.linked_to,
            )
        return kept.linked_to, kept.source if kept.source is not None else ""

    def __repr__(self) -> str:
        return f"InterfaceStrategy(input_type={self.input_type!r}, output_type={self.output_type!r})"


def _string_attribute(definition, name: str, value: Optional[str]) -> ComponentAttribute:
    return ComponentAttribute(
        name=name,
        value=value,
        type=STRING_TYPE,
        definition=find_attribute_definition(definition, name),
    )


ELECTRICAL_INTERFACE = InterfaceStrategy("electricalInputInterface", "electricalOutputInterface")
CONTROL_INTERFACE = InterfaceStrategy("controlInputInterface", "controlOutputInterface")
