# src/electrificator_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class ElectrificatorError(Exception):
    """Base class for all custom, user-facing errors in Electrificator Core."""
    pass

class DocumentParseError(ElectrificatorError):
    """
    Raised when a schematic document cannot be turned into components, from loading
    the file to walking its containment tree. The message is a pre-formatted,
    user-friendly diagnostic report.
    """
    pass

class DefinitionRegistryError(ElectrificatorError):
    """
    Raised when a component definition registry cannot be loaded or fails its
    structural checks. The message is a pre-formatted diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    Subclasses must implement `get_diagnostic_report`, so every internal failure
    can be turned into a user-facing report by the facades.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Unterminated Container").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (component id, file path, node type, ...).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "============= Electrificator Core: Actionable Diagnostic Report =============",
        f"Error Type:     {error_type}",
    ]
    if component_id := context.get('component_id'):
        lines.append(f"Component:      {component_id}")
    if node_type := context.get('node_type'):
        lines.append(f"Node Type:      {node_type}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("=============================================================================")
    return "\n".join(lines)
