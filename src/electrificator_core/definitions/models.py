# src/electrificator_core/definitions/models.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentAttributeDefinition:
    """One attribute a component type declares (name, value type and form hints)."""
    name: str
    type: str
    rules: Tuple[Any, ...] = ()
    required: bool = False
    description: Optional[str] = None


@dataclass(frozen=True)
class ComponentDefinition:
    """
    Read-only descriptor of a component type.

    Definitions are shared by every component restored during a parse session and
    are never mutated by the parser.
    """
    type: str
    defined_attributes: Tuple[ComponentAttributeDefinition, ...] = ()
    is_container: bool = False
    description: Optional[str] = None

    def find_attribute(self, name: str) -> Optional[ComponentAttributeDefinition]:
        """Returns the declared attribute called `name`, or None when undeclared."""
        for attribute in self.defined_attributes:
            if attribute.name == name:
                return attribute
        return None


@dataclass(frozen=True)
class DefinitionRegistry:
    """
    Ordered collection of component definitions.
    Lookups are by exact type string; the first matching definition wins.
    """
    definitions: Tuple[ComponentDefinition, ...] = field(default_factory=tuple)

    @classmethod
    def from_definitions(cls, definitions: Iterable[ComponentDefinition]) -> DefinitionRegistry:
        return cls(tuple(definitions))

    def find(self, type_str: Optional[str]) -> Optional[ComponentDefinition]:
        for definition in self.definitions:
            if definition.type == type_str:
                return definition
        return None

    @property
    def types(self) -> List[str]:
        return [definition.type for definition in self.definitions]

    def __iter__(self) -> Iterator[ComponentDefinition]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    def __contains__(self, type_str: object) -> bool:
        return any(definition.type == type_str for definition in self.definitions)
