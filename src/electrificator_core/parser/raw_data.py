# src/electrificator_core/parser/raw_data.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

# Raw nodes are the walker's view of one document node. They are mutable on purpose:
# interface restoration consumes one port direction and drops the 'role' routing field.

INPUT_PORTS = "in"
OUTPUT_PORTS = "out"


@dataclass
class RawPort:
    """A connection point of a raw node, optionally linked to another node's id."""
    name: str
    linked_to: Optional[str] = None
    source: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return self.linked_to is not None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RawPort:
        if not isinstance(raw, Mapping) or "name" not in raw:
            raise ValueError(f"A port must be a mapping with a 'name' key, got: {raw!r}")
        return cls(
            name=str(raw["name"]),
            linked_to=raw.get("linkedTo", raw.get("linked_to")),
            source=raw.get("source"),
        )


# Ports are grouped by direction ({"in": [...], "out": [...]}) or given as one flat list.
RawPorts = Union[Dict[str, List[RawPort]], List[RawPort]]


@dataclass
class RawNode:
    """One node of the source document, as seen by the restoration strategies."""
    name: str
    type: str
    parent_id: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    ports: RawPorts = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], parent_id: Optional[str] = None) -> RawNode:
        """
        Builds a raw node from its document mapping.

        Attribute and port containers are copied, so restoring a node never mutates
        the caller's document. `parent_id` is used when the mapping has no explicit
        `parentId`.
        """
        if not isinstance(raw, Mapping):
            raise ValueError(f"A node must be a mapping, got {type(raw).__name__}.")
        if not raw.get("name"):
            raise ValueError("A node must have a non-empty 'name'.")
        if not raw.get("type"):
            raise ValueError(f"Node '{raw['name']}' must have a non-empty 'type'.")

        attributes = raw.get("attributes") or {}
        if not isinstance(attributes, Mapping):
            raise ValueError(f"Node '{raw['name']}' has 'attributes' that is not a mapping.")

        explicit_parent = raw.get("parentId", raw.get("parent_id", parent_id))
        return cls(
            name=str(raw["name"]),
            type=str(raw["type"]),
            parent_id=str(explicit_parent) if explicit_parent is not None else None,
            attributes=dict(attributes),
            ports=_ports_from_raw(raw.get("ports"), raw["name"]),
        )

    def ports_in(self, direction: str) -> List[RawPort]:
        """Ports of one direction; a flat port list has no directions."""
        if isinstance(self.ports, dict):
            return self.ports.get(direction, [])
        return []

    def clear_ports(self, direction: str) -> None:
        if isinstance(self.ports, dict):
            self.ports[direction] = []


def _ports_from_raw(raw_ports: Any, node_name: str) -> RawPorts:
    if raw_ports is None:
        return {}
    if isinstance(raw_ports, Mapping):
        ports: Dict[str, List[RawPort]] = {}
        for direction, port_list in raw_ports.items():
            if not isinstance(port_list, list):
                raise ValueError(f"Node '{node_name}' has ports '{direction}' that is not a list.")
            ports[str(direction)] = [RawPort.from_dict(port) for port in port_list]
        return ports
    if isinstance(raw_ports, list):
        return [RawPort.from_dict(port) for port in raw_ports]
    raise ValueError(f"Node '{node_name}' has 'ports' that is neither a mapping nor a list.")
