# src/electrificator_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("Electrificator Core package initialized.")

from .data_structures import Component, ComponentAttribute, FileInformation, ParseResult, LINK_TYPE, STRING_TYPE
from .definitions import (
    ComponentAttributeDefinition, ComponentDefinition, DefinitionRegistry,
    load_definitions, load_default_definitions,
)
from .issues import ParseIssue, ParseIssueCode, ParseIssueLevel
from .parser import ElectrificatorListener, ElectrificatorParser, NodeCategory
from .errors import ElectrificatorError, DocumentParseError, DefinitionRegistryError

__all__ = [
    # Data Structures
    "Component", "ComponentAttribute", "FileInformation", "ParseResult",
    "LINK_TYPE", "STRING_TYPE",
    # Definitions
    "ComponentAttributeDefinition", "ComponentDefinition", "DefinitionRegistry",
    "load_definitions", "load_default_definitions",
    # Issues
    "ParseIssue", "ParseIssueCode", "ParseIssueLevel",
    # Parser
    "ElectrificatorListener", "ElectrificatorParser", "NodeCategory",
    # Top-Level Errors (Actionable Diagnostics)
    "ElectrificatorError", "DocumentParseError", "DefinitionRegistryError",
]
