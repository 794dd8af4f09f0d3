# src/electrificator_core/parser/listener.py
"""
The listener driven by the tree walker: one `enter_node` before a node's children,
one `exit_node` after them.

Dispatch is an explicit table from node type tag to `NodeCategory`, and from
category to restoration strategy. Supporting a new dipole-like type only takes a
new entry in `NODE_CATEGORIES` (or in a listener's `extra_categories`).
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Union

from ..data_structures import Component, ComponentAttribute, FileInformation, ParseResult
from ..definitions.models import ComponentDefinition, DefinitionRegistry
from ..issues import ParseIssue, ParseIssueCode
from .exceptions import (
    ContainerStackMismatchError,
    ContainerStackUnderflowError,
    UnterminatedContainerError,
)
from .raw_data import RawNode
from .strategies import (
    CONTROL_INTERFACE,
    ELECTRICAL_INTERFACE,
    RestorationStrategy,
    restore_container,
    restore_dipole,
    restore_line,
)

logger = logging.getLogger(__name__)


class NodeCategory(Enum):
    """How a node is restored."""
    CONTAINER = "container"
    GENERIC_DIPOLE = "genericDipole"
    GENERIC_LINE = "genericLine"
    ELECTRICAL_INTERFACE = "electricalInterface"
    CONTROL_INTERFACE = "controlInterface"


DIPOLE_TYPES = (
    "genericDipole",
    "circuitBreaker",
    "externalDevice",
    "contactor",
    "switch",
    "energyMeter",
    "mxCoil",
    "securityKey",
    "transformer",
    "ground",
    "fuse",
    "switchDisconnector",
    "disconnector",
    "electricalSupply",
    "manualActuator",
    "kmCoil",
    "generalActuator",
    "sts",
    "junctionBox",
)

LINE_TYPES = ("electricalLine", "controlLine")

NODE_CATEGORIES: Dict[str, NodeCategory] = {
    "Container": NodeCategory.CONTAINER,
    **{type_str: NodeCategory.GENERIC_DIPOLE for type_str in DIPOLE_TYPES},
    **{type_str: NodeCategory.GENERIC_LINE for type_str in LINE_TYPES},
    "electricalInterface": NodeCategory.ELECTRICAL_INTERFACE,
    "controlInterface": NodeCategory.CONTROL_INTERFACE,
}

ENTER_STRATEGIES: Dict[NodeCategory, RestorationStrategy] = {
    NodeCategory.CONTAINER: restore_container,
    NodeCategory.GENERIC_DIPOLE: restore_dipole,
    NodeCategory.GENERIC_LINE: restore_line,
    NodeCategory.ELECTRICAL_INTERFACE: ELECTRICAL_INTERFACE,
    NodeCategory.CONTROL_INTERFACE: CONTROL_INTERFACE,
}


@dataclass
class ParseSession:
    """
    All mutable state of one parse: finished components, open containers and
    recorded warnings. One session per parsed file; never shared between threads.
    """
    file_information: FileInformation
    definitions: DefinitionRegistry
    components: List[Component] = field(default_factory=list)
    container_stack: List[Component] = field(default_factory=list)
    warnings: List[ParseIssue] = field(default_factory=list)

    def find_definition(self, type_str: str) -> Optional[ComponentDefinition]:
        definition = self.definitions.find(type_str)
        if definition is None:
            logger.debug(f"No definition registered for type '{type_str}'; its attributes stay undeclared.")
        return definition

    def create_component(
        self,
        component_id: str,
        definition: Optional[ComponentDefinition],
        attributes: List[ComponentAttribute],
    ) -> Component:
        return Component(
            id=component_id,
            definition=definition,
            path=self.file_information.path,
            attributes=attributes,
        )

    def emit(self, component: Component) -> None:
        logger.debug(f"Restored {component}.")
        self.components.append(component)

    def push_container(self, component: Component) -> None:
        self.container_stack.append(component)
        logger.debug(f"Opened container '{component.id}' (depth {len(self.container_stack)}).")

    def close_container(self, node_name: str) -> Component:
        if not self.container_stack:
            raise ContainerStackUnderflowError(component_id=node_name, file_path=self.file_information.path)
        if self.container_stack[-1].id != node_name:
            raise ContainerStackMismatchError(
                component_id=node_name,
                open_container_id=self.container_stack[-1].id,
                file_path=self.file_information.path,
            )
        container = self.container_stack.pop()
        self.emit(container)
        return container

    def add_warning(self, code_enum: ParseIssueCode, **kwargs) -> ParseIssue:
        issue = ParseIssue.from_code(code_enum, **kwargs)
        logger.warning(str(issue))
        self.warnings.append(issue)
        return issue

    @property
    def depth(self) -> int:
        return len(self.container_stack)


class ElectrificatorListener:
    """
    Restores the components of one document from enter/exit callbacks.

    Args:
        file_information: The file being parsed; its path is copied onto every component.
        definitions: Component definitions, as a registry or an ordered iterable.
        extra_categories: Additional type tag -> category entries for this listener.
    """

    def __init__(
        self,
        file_information: FileInformation,
        definitions: Union[DefinitionRegistry, Iterable[ComponentDefinition]],
        extra_categories: Optional[Mapping[str, NodeCategory]] = None,
    ):
        if not isinstance(definitions, DefinitionRegistry):
            definitions = DefinitionRegistry.from_definitions(definitions)
        self.session = ParseSession(file_information=file_information, definitions=definitions)
        self.categories: Dict[str, NodeCategory] = dict(NODE_CATEGORIES)
        if extra_categories:
            self.categories.update(extra_categories)

    @property
    def components(self) -> List[Component]:
        return self.session.components

    @property
    def container_stack(self) -> List[Component]:
        return self.session.container_stack

    @property
    def warnings(self) -> List[ParseIssue]:
        return self.session.warnings

    def category_of(self, node: RawNode) -> Optional[NodeCategory]:
        category = self.categories.get(node.type)
        if category is None:
            definition = self.session.definitions.find(node.type)
            if definition is not None and definition.is_container:
                category = NodeCategory.CONTAINER
        return category

    def enter_node(self, node: RawNode) -> None:
        category = self.category_of(node)
        if category is None:
            self.session.add_warning(ParseIssueCode.UNKNOWN_NODE_TYPE, component_id=node.name, node_type=node.type)
            return
        logger.debug(f"Entering {category.value} node '{node.name}' ({node.type}).")
        ENTER_STRATEGIES[category](self.session, node)

    def exit_node(self, node: RawNode) -> None:
        if self.category_of(node) is NodeCategory.CONTAINER:
            self.session.close_container(node.name)

    def finish(self) -> ParseResult:
        """Ends the walk. Raises `UnterminatedContainerError` if a container is still open."""
        if self.session.container_stack:
            raise UnterminatedContainerError(
                open_container_ids=tuple(container.id for container in self.session.container_stack),
                file_path=self.session.file_information.path,
            )
        return ParseResult(components=list(self.session.components), warnings=list(self.session.warnings))
