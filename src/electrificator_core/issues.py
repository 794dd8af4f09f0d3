# src/electrificator_core/issues.py
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class ParseIssueLevel(Enum):
    """Severity level of a parse issue."""
    WARNING = "WARNING"

    def __str__(self):
        return self.value


class ParseIssueCode(Enum):
    """
    Registry of recoverable parse issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Interface restoration ---
    INVALID_INTERFACE_ROLE = ("invalid_interface_role", "Invalid interface role: {role} for component {component_id}")
    INTERFACE_MULTIPLE_LINKS = ("interface_multiple_links", "Interface {component_id} has {link_count} connected '{direction}' ports; only the link to '{kept_link}' is kept.")

    # --- Walk dispatch ---
    UNKNOWN_NODE_TYPE = ("unknown_node_type", "Node {component_id} has type '{node_type}' which has no restoration strategy; it is skipped.")
    DANGLING_PARENT_REFERENCE = ("dangling_parent_reference", "Node {component_id} references parent '{parent_id}' which is not part of the document; it is placed at the top level.")

    # --- Attribute assembly ---
    RESERVED_ATTRIBUTE_DROPPED = ("reserved_attribute_dropped", "Component {component_id} has {origin} '{attribute_name}' which is derived by the parser; the {origin} is dropped.")
    PORT_ATTRIBUTE_CONFLICT = ("port_attribute_conflict", "Component {component_id} has an attribute and a connected port both named '{attribute_name}'; the port link is kept and the attribute is dropped.")
    DUPLICATE_PORT_NAME = ("duplicate_port_name", "Component {component_id} has several connected ports named '{port_name}'; only the first one is kept.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"


@dataclass
class ParseIssue:
    """
    A single recoverable problem found while restoring a document.
    The offending node is skipped or degraded; the walk carries on.
    """
    level: ParseIssueLevel
    code: str
    message: str
    component_id: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_code(cls, code_enum: ParseIssueCode, level: ParseIssueLevel = ParseIssueLevel.WARNING, **kwargs) -> "ParseIssue":
        return cls(
            level=level,
            code=code_enum.code,
            message=code_enum.format_message(**kwargs),
            component_id=kwargs.get('component_id'),
            details=kwargs,
        )

    def to_dict(self) -> Dict[str, str]:
        """The `{code, message}` shape handed to diagram tools."""
        return {"code": self.code, "message": self.message}

    def __str__(self) -> str:
        parts = [f"[{self.level.name} - {self.code}]"]
        if self.component_id:
            parts.append(f"Component: {self.component_id}")
        parts.append(f"Message: {self.message}")

        filtered_details = {k: v for k, v in self.details.items() if k != 'component_id'}
        if filtered_details:
            details_str = ", ".join(f"{k}={v}" for k, v in sorted(filtered_details.items()))
            parts.append(f"Details: ({details_str})")

        return " ".join(parts)
