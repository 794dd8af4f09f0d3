# src/electrificator_core/parser/walker.py
"""
Depth-first driver feeding a document's nodes to an `ElectrificatorListener`.

Nodes may be nested under a `children` key or listed flat with a `parentId`. The
walker arranges them into one containment graph hanging from a virtual document
root and walks it depth-first in document order: `enter_node` on the way down,
`exit_node` on the way up.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import networkx as nx

from ..data_structures import ParseResult
from ..issues import ParseIssueCode
from .exceptions import DocumentLoadError, DocumentStructureError
from .listener import ElectrificatorListener
from .raw_data import RawNode

logger = logging.getLogger(__name__)

COMPONENTS_KEY = "components"
CHILDREN_KEY = "children"

_DOCUMENT_ROOT = "<document-root>"


class DocumentWalker:
    """Walks one loaded document. Instances are single use, like the listener they drive."""

    def __init__(self, listener: ElectrificatorListener, file_path: Optional[Path] = None):
        self.listener = listener
        self.file_path = file_path

    def walk(self, document: Any) -> ParseResult:
        nodes = self._collect_nodes(document)
        graph = self._build_containment_graph(nodes)

        logger.debug(f"Walking {len(nodes)} node(s) from '{self.file_path or '<string>'}'.")
        for parent, child, direction in nx.dfs_labeled_edges(graph, source=_DOCUMENT_ROOT):
            if child == _DOCUMENT_ROOT:
                continue
            if direction == "forward":
                self.listener.enter_node(nodes[child])
            elif direction == "reverse":
                self.listener.exit_node(nodes[child])

        return self.listener.finish()

    def _collect_nodes(self, document: Any) -> Dict[str, RawNode]:
        nodes: Dict[str, RawNode] = {}
        for raw_node, enclosing_id in self._iter_raw_nodes(self._top_level_nodes(document), None):
            try:
                node = RawNode.from_dict(raw_node, parent_id=enclosing_id)
            except ValueError as e:
                raise DocumentStructureError(details=str(e), file_path=self.file_path) from e
            if node.name in nodes:
                raise DocumentStructureError(
                    details=f"Node name '{node.name}' is used more than once; node names identify components.",
                    file_path=self.file_path,
                    component_id=node.name,
                )
            nodes[node.name] = node
        return nodes

    def _top_level_nodes(self, document: Any) -> List[Any]:
        if isinstance(document, list):
            return document
        if isinstance(document, Mapping):
            top_level = document.get(COMPONENTS_KEY, [])
            if isinstance(top_level, list):
                return top_level
            raise DocumentLoadError(details=f"'{COMPONENTS_KEY}' must be a list of nodes.", file_path=self.file_path)
        raise DocumentLoadError(
            details=f"The document root must be a mapping or a list, got {type(document).__name__}.",
            file_path=self.file_path,
        )

    def _build_containment_graph(self, nodes: Dict[str, RawNode]) -> nx.DiGraph:
        graph = nx.DiGraph()
        graph.add_node(_DOCUMENT_ROOT)
        graph.add_nodes_from(nodes)

        # Edges are added in document order; the DFS visits children in that order.
        for name, node in nodes.items():
            parent = node.parent_id
            if parent is None:
                parent = _DOCUMENT_ROOT
            elif parent not in nodes:
                self.listener.session.add_warning(
                    ParseIssueCode.DANGLING_PARENT_REFERENCE, component_id=name, parent_id=parent
                )
                parent = _DOCUMENT_ROOT
            graph.add_edge(parent, name)

        cycles = list(nx.simple_cycles(graph))
        if cycles:
            cycle_str = ", ".join(" -> ".join(cycle + [cycle[0]]) for cycle in cycles)
            raise DocumentStructureError(
                details=f"Containment cycle(s) detected through 'parentId': {cycle_str}",
                file_path=self.file_path,
                component_id=cycles[0][0],
            )
        return graph

    def _iter_raw_nodes(self, raw_nodes: List[Any], enclosing_id: Optional[str]) -> Iterator[Tuple[Any, Optional[str]]]:
        """Flattens nested `children` lists, pairing each raw node with its enclosing node's name."""
        for raw_node in raw_nodes:
            yield raw_node, enclosing_id
            if not isinstance(raw_node, Mapping) or not raw_node.get(CHILDREN_KEY):
                continue
            children = raw_node[CHILDREN_KEY]
            if not isinstance(children, list):
                raise DocumentStructureError(
                    details=f"'{CHILDREN_KEY}' of node '{raw_node.get('name')}' must be a list of nodes.",
                    file_path=self.file_path,
                )
            name = raw_node.get("name")
            yield from self._iter_raw_nodes(children, str(name) if name is not None else None)
