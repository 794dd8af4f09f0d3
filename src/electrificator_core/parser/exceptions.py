# src/electrificator_core/parser/exceptions.py
"""
Diagnosable exceptions for loading and walking schematic documents.

Locally malformed nodes never raise: they are reported as `ParseIssue` warnings and
the walk carries on. The exceptions below are for problems that make the whole
document unusable:

1.  `DocumentLoadError` for file-level or syntax problems.
2.  `DocumentStructureError` for a containment tree that cannot be walked
    (missing names, duplicate names, containment cycles).
3.  `ContainerStackError` for enter/exit callbacks that do not pair up. These point
    at a defect in the tree-walking driver, not at the document.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all document loading and walking errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the schematic document.",
            context={}
        )


@dataclass(frozen=True)
class DocumentLoadError(BaseParsingError):
    """
    Raised when the document file is missing or unreadable, contains invalid
    JSON/YAML syntax, or has a root that is neither a mapping nor a list.
    """
    details: str
    file_path: Optional[Path] = None

    def __str__(self):
        return f"Parsing error in file '{self.file_path or '<string>'}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Document Load Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid JSON or YAML.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class DocumentStructureError(BaseParsingError):
    """
    Raised when the nodes of a document cannot be arranged into a containment tree.
    """
    details: str
    file_path: Optional[Path] = None
    component_id: Optional[str] = None

    def __str__(self):
        return f"Invalid document structure in '{self.file_path or '<string>'}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Document Structure Error",
            details=self.details,
            suggestion="Every node needs a unique 'name' and a 'type', and 'parentId' references must not form a cycle.",
            context={'source_file': self.file_path, 'component_id': self.component_id}
        )


class ContainerStackError(BaseParsingError):
    """Base class for unbalanced enter/exit callbacks on containers."""


@dataclass(frozen=True)
class ContainerStackUnderflowError(ContainerStackError):
    """Raised when a container is exited while no container is open."""
    component_id: str
    file_path: Optional[str] = None

    def __str__(self):
        return f"Exit of container '{self.component_id}' with an empty container stack."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Container Stack Underflow",
            details=str(self),
            suggestion="The tree-walking driver must call exit exactly once for every entered container, after its children.",
            context={'component_id': self.component_id, 'source_file': self.file_path}
        )


@dataclass(frozen=True)
class UnterminatedContainerError(ContainerStackError):
    """Raised when the walk finishes while containers are still open."""
    open_container_ids: Tuple[str, ...]
    file_path: Optional[str] = None

    def __str__(self):
        return f"Walk finished with {len(self.open_container_ids)} unterminated container(s): {list(self.open_container_ids)}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unterminated Container",
            details=str(self),
            suggestion="The tree-walking driver must exit every container it enters before finishing the walk.",
            context={'component_id': self.open_container_ids[-1] if self.open_container_ids else None,
                     'source_file': self.file_path}
        )


@dataclass(frozen=True)
class ContainerStackMismatchError(ContainerStackError):
    """Raised when a container is exited while a different container is the innermost open one."""
    component_id: str
    open_container_id: str
    file_path: Optional[str] = None

    def __str__(self):
        return (
            f"Exit of container '{self.component_id}' while container '{self.open_container_id}' "
            "is the innermost open container."
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Container Stack Mismatch",
            details=str(self),
            suggestion="The tree-walking driver must exit containers in the reverse order it entered them.",
            context={'component_id': self.component_id, 'source_file': self.file_path}
        )
