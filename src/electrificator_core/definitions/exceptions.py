# src/electrificator_core/definitions/exceptions.py
"""
Diagnosable exceptions raised while loading a component definition registry.

`DefinitionLoadError` covers file-level and syntax problems, while
`DefinitionSchemaError` covers a registry that is valid YAML but does not have
the structure of a definition registry.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseDefinitionError(DiagnosableError):
    """Local base class for all definition registry loading errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Definition Registry Error",
            details=str(self),
            suggestion="Please check the format and content of the definition registry file.",
            context={}
        )


@dataclass(frozen=True)
class DefinitionLoadError(BaseDefinitionError):
    """
    Raised when the registry file is missing, unreadable, or not valid YAML.
    """
    details: str
    file_path: Optional[Path] = None

    def __str__(self):
        return f"Definition registry error in '{self.file_path or '<string>'}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Definition Registry File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class DefinitionSchemaError(BaseDefinitionError):
    """
    Raised when Cerberus validation of the registry structure fails (missing keys,
    invalid type names, duplicate types or attributes).
    """
    errors: Dict[str, Any]
    file_path: Optional[Path] = None

    def _error_lines(self):
        return [f"  - Field '{k}': {v}" for k, v in sorted(self.errors.items(), key=lambda item: str(item[0]))]

    def __str__(self):
        return (
            f"Definition registry validation failed for '{self.file_path or '<string>'}':\n"
            + "\n".join(self._error_lines())
        )

    def get_diagnostic_report(self) -> str:
        details = (
            "The definition registry does not conform to the required structure.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n" + "\n".join(self._error_lines())
        )
        return format_diagnostic_report(
            error_type="Definition Registry Schema Error",
            details=details,
            suggestion="Every entry needs a 'type' identifier; type names must be unique and attribute names must be unique within a type.",
            context={'source_file': self.file_path}
        )
