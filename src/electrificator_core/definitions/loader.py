# src/electrificator_core/definitions/loader.py
import json
import logging
import re
import string
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import cerberus
import yaml

from .models import ComponentAttributeDefinition, ComponentDefinition, DefinitionRegistry
from .exceptions import DefinitionLoadError, DefinitionSchemaError
from ..errors import DefinitionRegistryError, DiagnosableError

logger = logging.getLogger(__name__)

# Type tags and attribute names are camelCase identifiers ("circuitBreaker", "inputName").
ID_REGEX = r"^[a-zA-Z_][a-zA-Z0-9_]*$"
ALLOWED_ID_CHARS = set(string.ascii_letters + string.digits + "_")

DEFAULT_DEFINITIONS_RESOURCE = "default_definitions.yaml"


class RegistryValidator(cerberus.Validator):
    """Cerberus validator with the naming and uniqueness rules of a definition registry."""

    def _validate_id_regex(self, constraint, field, value):
        """
        Validates that a string is a plain identifier.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint:
            return
        if not isinstance(value, str):
            self._error(field, "must be a string to be validated by id_regex.")
            return
        if not re.match(ID_REGEX, value):
            invalid_chars = sorted(set(value) - ALLOWED_ID_CHARS)
            self._error(
                field,
                f"Identifier '{value}' is invalid. Identifiers must start with a letter or underscore "
                f"and can only contain letters, numbers, and underscores. Forbidden character(s): {invalid_chars}"
            )

    def _validate_unique_elements_by_key(self, key_for_uniqueness, field, value):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue
            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {sorted(set(duplicates))}")


_attribute_schema = {
    "name": {"type": "string", "required": True, "empty": False, "id_regex": True},
    "type": {"type": "string", "required": False, "empty": False, "default": "string"},
    "rules": {"type": "list", "required": False, "default": []},
    "required": {"type": "boolean", "required": False, "default": False},
    "description": {"type": "string", "required": False, "nullable": True},
}

_definition_schema = {
    "type": {"type": "string", "required": True, "empty": False, "id_regex": True},
    "isContainer": {"type": "boolean", "required": False, "default": False},
    "description": {"type": "string", "required": False, "nullable": True},
    "attributes": {
        "type": "list", "required": False, "default": [],
        "unique_elements_by_key": "name",
        "schema": {"type": "dict", "schema": _attribute_schema},
    },
}

REGISTRY_SCHEMA = {
    "definitions": {
        "type": "list", "required": True, "minlength": 1,
        "unique_elements_by_key": "type",
        "schema": {"type": "dict", "schema": _definition_schema},
    },
}


def load_definitions(source: Union[str, Path], *, from_text: bool = False) -> DefinitionRegistry:
    """
    Loads and validates a definition registry.

    Args:
        source: Path to a YAML (or JSON) registry file, or the registry text itself
                when `from_text` is True.
        from_text: Treat `source` as document text instead of a path.

    Returns:
        The ordered `DefinitionRegistry`.

    Raises:
        DefinitionRegistryError: with a diagnostic report, when the registry cannot be
            read or does not have the structure of a registry.
    """
    file_path: Optional[Path] = None
    try:
        if from_text:
            content = _safe_load(str(source), None)
        else:
            file_path = Path(source).resolve()
            content = _load_registry_file(file_path)
        return _build_registry(content, file_path)
    except DiagnosableError as e:
        raise DefinitionRegistryError(e.get_diagnostic_report()) from e


def load_default_definitions() -> DefinitionRegistry:
    """Loads the registry of electrical component types shipped with the package."""
    text = resources.files(__package__).joinpath(DEFAULT_DEFINITIONS_RESOURCE).read_text(encoding="utf-8")
    logger.debug("Loading bundled definition registry '%s'.", DEFAULT_DEFINITIONS_RESOURCE)
    return load_definitions(text, from_text=True)


def _build_registry(content: Any, file_path: Optional[Path]) -> DefinitionRegistry:
    validator = RegistryValidator(REGISTRY_SCHEMA)
    validator.allow_unknown = False
    if not validator.validate(content):
        raise DefinitionSchemaError(errors=validator.errors, file_path=file_path)

    definitions: List[ComponentDefinition] = []
    for raw_definition in validator.document["definitions"]:
        attributes = tuple(
            ComponentAttributeDefinition(
                name=raw_attribute["name"],
                type=raw_attribute["type"],
                rules=tuple(raw_attribute["rules"]),
                required=raw_attribute["required"],
                description=raw_attribute.get("description"),
            )
            for raw_attribute in raw_definition["attributes"]
        )
        definitions.append(ComponentDefinition(
            type=raw_definition["type"],
            defined_attributes=attributes,
            is_container=raw_definition["isContainer"],
            description=raw_definition.get("description"),
        ))

    registry = DefinitionRegistry.from_definitions(definitions)
    logger.info(f"Loaded {len(registry)} component definition(s) from {file_path or 'text'}.")
    return registry


def _load_registry_file(source: Path) -> Dict[str, Any]:
    if not source.is_file():
        raise DefinitionLoadError(details=f"Definition registry not found at path: {source}", file_path=source)
    try:
        text = source.read_text(encoding="utf-8")
    except PermissionError as e:
        raise DefinitionLoadError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
    except UnicodeDecodeError as e:
        raise DefinitionLoadError(details=f"The file is not valid UTF-8 text: {e}", file_path=source) from e
    return _safe_load(text, source)


def _safe_load(text: str, source: Optional[Path]) -> Dict[str, Any]:
    is_json_file = source is not None and source.suffix.lower() == ".json"
    content = None
    if is_json_file or text.lstrip()[:1] == "{":
        try:
            content = json.loads(text)
        except json.JSONDecodeError as e:
            if is_json_file:
                raise DefinitionLoadError(details=f"Invalid JSON syntax: {e}", file_path=source) from e
    if content is None:
        content = _yaml_load(text, source)
    if content is None:
        raise DefinitionLoadError(details="The registry is empty or contains no valid content.", file_path=source)
    if not isinstance(content, dict):
        raise DefinitionLoadError(details="The root of the registry must be a mapping with a 'definitions' list.", file_path=source)
    return content


def _yaml_load(text: str, source: Optional[Path]) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DefinitionLoadError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
