# src/electrificator_core/data_structures.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from .definitions.models import ComponentAttributeDefinition, ComponentDefinition
    from .issues import ParseIssue

#: Type tag of plain attributes, including every attribute taken from a node's raw attribute map.
STRING_TYPE = "string"
#: Type tag of port links; the value is always a list of linked component ids.
LINK_TYPE = "Array"

AttributeValue = Union[str, int, float, bool, None, List[str]]


@dataclass
class ComponentAttribute:
    """
    One named value of a component.
    `definition` is None when the source document supplied an attribute that the
    component's definition does not declare.
    """
    name: str
    value: AttributeValue
    type: str = STRING_TYPE
    definition: Optional[ComponentAttributeDefinition] = None

    @property
    def is_declared(self) -> bool:
        return self.definition is not None


@dataclass
class Component:
    """
    A restored component: a typed node of the diagram model.

    The component owns its attribute list; its definition is shared with every
    other component of the same type.
    """
    id: str
    definition: Optional[ComponentDefinition]
    path: Optional[str]
    attributes: List[ComponentAttribute] = field(default_factory=list)

    @property
    def type(self) -> Optional[str]:
        return self.definition.type if self.definition is not None else None

    def get_attribute(self, name: str) -> Optional[ComponentAttribute]:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def get_attribute_value(self, name: str, default: Any = None) -> Any:
        attribute = self.get_attribute(name)
        return attribute.value if attribute is not None else default

    @property
    def attribute_names(self) -> List[str]:
        return [attribute.name for attribute in self.attributes]

    def __str__(self) -> str:
        return f"Component('{self.id}', type={self.type!r})"


@dataclass(frozen=True)
class FileInformation:
    """The file a parse session reads from. `path` is None for in-memory documents."""
    path: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path, None]) -> FileInformation:
        return cls(str(path) if path is not None else None)


@dataclass
class ParseResult:
    """Everything one parse session hands back to its caller."""
    components: List[Component] = field(default_factory=list)
    warnings: List[ParseIssue] = field(default_factory=list)

    def warnings_as_dicts(self) -> List[Dict[str, str]]:
        return [issue.to_dict() for issue in self.warnings]

    def find_component(self, component_id: str) -> Optional[Component]:
        for component in self.components:
            if component.id == component_id:
                return component
        return None
