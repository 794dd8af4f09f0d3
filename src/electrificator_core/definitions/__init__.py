# src/electrificator_core/definitions/__init__.py
from .models import ComponentAttributeDefinition, ComponentDefinition, DefinitionRegistry
from .loader import load_definitions, load_default_definitions
from .exceptions import DefinitionLoadError, DefinitionSchemaError

__all__ = [
    # Models
    "ComponentAttributeDefinition",
    "ComponentDefinition",
    "DefinitionRegistry",
    # Loading
    "load_definitions",
    "load_default_definitions",
    # Exceptions
    "DefinitionLoadError",
    "DefinitionSchemaError",
]
