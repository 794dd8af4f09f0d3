# src/electrificator_core/parser/parser.py
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

import yaml

from ..data_structures import FileInformation, ParseResult
from ..definitions import ComponentDefinition, DefinitionRegistry, load_default_definitions
from ..errors import DiagnosableError, DocumentParseError, format_diagnostic_report
from .exceptions import DocumentLoadError
from .listener import ElectrificatorListener, NodeCategory
from .walker import DocumentWalker

logger = logging.getLogger(__name__)


class ElectrificatorParser:
    """
    Turns schematic documents (JSON or YAML) into flat lists of components.

    The parser itself holds no per-document state: every call to `parse` or
    `parse_file` runs its own listener, so one parser can be reused for many files.
    """

    def __init__(
        self,
        definitions: Union[DefinitionRegistry, Iterable[ComponentDefinition], None] = None,
        extra_categories: Optional[Mapping[str, NodeCategory]] = None,
    ):
        if definitions is None:
            definitions = load_default_definitions()
        elif not isinstance(definitions, DefinitionRegistry):
            definitions = DefinitionRegistry.from_definitions(definitions)
        self.definitions: DefinitionRegistry = definitions
        self.extra_categories = dict(extra_categories or {})
        logger.info(f"ElectrificatorParser initialized with {len(self.definitions)} component definition(s).")

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """Loads and restores one document file."""
        path = Path(file_path).resolve()
        return self._run(lambda: self._load_file(path), path)

    def parse(self, content: Any, file_path: Union[str, Path, None] = None) -> ParseResult:
        """
        Restores a document given as text or as an already-deserialized tree.

        Args:
            content: JSON/YAML text, or the document mapping/list itself.
            file_path: Path recorded on every restored component.
        """
        path = Path(file_path) if file_path is not None else None
        if isinstance(content, str):
            return self._run(lambda: _safe_load(content, path), path)
        return self._run(lambda: content, path)

    def _run(self, load, path: Optional[Path]) -> ParseResult:
        logger.info(f"--- Restoring components from '{path or '<string>'}' ---")
        try:
            document = load()
            listener = ElectrificatorListener(
                FileInformation.from_path(path), self.definitions, self.extra_categories
            )
            result = DocumentWalker(listener, file_path=path).walk(document)
        except DiagnosableError as e:
            raise DocumentParseError(e.get_diagnostic_report()) from e
        except Exception as e:
            report = format_diagnostic_report(
                error_type=f"An Unexpected Error Occurred ({type(e).__name__})",
                details=f"The parser encountered an unexpected internal error: {e}",
                suggestion="This may indicate a bug in Electrificator Core. Please review the traceback.",
                context={'source_file': path},
            )
            raise DocumentParseError(report) from e

        logger.info(
            f"--- Restored {len(result.components)} component(s) with {len(result.warnings)} warning(s) "
            f"from '{path or '<string>'}' ---"
        )
        return result

    def _load_file(self, source: Path) -> Any:
        if not source.is_file():
            raise DocumentLoadError(details=f"Document not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                text = f.read()
        except PermissionError as e:
            raise DocumentLoadError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except UnicodeDecodeError as e:
            raise DocumentLoadError(details=f"The file is not valid UTF-8 text: {e}", file_path=source) from e
        return _safe_load(text, source)


def _is_json(text: str, source: Optional[Path]) -> bool:
    if source is not None and source.suffix.lower() == ".json":
        return True
    return text.lstrip()[:1] in ("{", "[")


def _safe_load(text: str, source: Optional[Path]) -> Any:
    # YAML 1.1 is not a superset of JSON (tab indentation, escaped surrogate pairs),
    # so JSON documents go through the JSON decoder. Text that merely starts like
    # JSON may still be a YAML flow collection.
    if _is_json(text, source):
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            if source is not None and source.suffix.lower() == ".json":
                raise DocumentLoadError(details=f"Invalid JSON syntax: {e}", file_path=source) from e
            logger.debug(f"Text is not JSON ({e}), trying YAML.")
    try:
        content = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
    if content is None:
        raise DocumentLoadError(details="The document is empty or contains no valid content.", file_path=source)
    return content
