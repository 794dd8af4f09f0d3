# src/electrificator_core/parser/__init__.py
from .raw_data import RawNode, RawPort
from .attributes import restore_attributes, restore_parent_container, restore_ports
from .strategies import (
    CONTROL_INTERFACE,
    ELECTRICAL_INTERFACE,
    InterfaceStrategy,
    restore_container,
    restore_dipole,
    restore_line,
)
from .listener import NODE_CATEGORIES, ElectrificatorListener, NodeCategory, ParseSession
from .walker import DocumentWalker
from .parser import ElectrificatorParser
from .exceptions import (
    ContainerStackError,
    ContainerStackMismatchError,
    ContainerStackUnderflowError,
    DocumentLoadError,
    DocumentStructureError,
    UnterminatedContainerError,
)

__all__ = [
    # Raw document nodes
    "RawNode",
    "RawPort",
    # Attribute restoration
    "restore_attributes",
    "restore_ports",
    "restore_parent_container",
    # Strategies
    "InterfaceStrategy",
    "ELECTRICAL_INTERFACE",
    "CONTROL_INTERFACE",
    "restore_container",
    "restore_dipole",
    "restore_line",
    # Dispatch and walking
    "NODE_CATEGORIES",
    "NodeCategory",
    "ParseSession",
    "ElectrificatorListener",
    "DocumentWalker",
    "ElectrificatorParser",
    # Exceptions
    "ContainerStackError",
    "ContainerStackMismatchError",
    "ContainerStackUnderflowError",
    "DocumentLoadError",
    "DocumentStructureError",
    "UnterminatedContainerError",
]
