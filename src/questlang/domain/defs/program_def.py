"""Top-level quest program and module definitions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .node_def import NodeDefinition


@dataclass(frozen=True, slots=True)
class ImportDecl:
    """``import Name from "path";`` declaration. ``alias`` is reserved."""

    module_name: str
    module_path: str
    alias: str | None = None
    line: int = 0
    column: int = 0


@dataclass(frozen=True, slots=True)
class GraphDef:
    """Node mapping plus the designated start node."""

    nodes: Dict[str, NodeDefinition] = field(default_factory=dict)
    start: str = ""
    duplicate_ids: Tuple[str, ...] = ()
    line: int = 0
    column: int = 0


@dataclass(frozen=True, slots=True)
class QuestProgram:
    """Fully parsed quest."""

    name: str
    goal: str
    graph: GraphDef
    imports: Tuple[ImportDecl, ...] = ()
    line: int = 0
    column: int = 0


@dataclass(frozen=True, slots=True)
class ModuleDef:
    """Importable collection of nodes with an export allow-list."""

    name: str
    nodes: Dict[str, NodeDefinition] = field(default_factory=dict)
    exports: Tuple[str, ...] = ()
    imports: Tuple[ImportDecl, ...] = ()
    duplicate_ids: Tuple[str, ...] = ()
    line: int = 0
    column: int = 0

    def is_exported(self, node_id: str) -> bool:
        return node_id in self.exports
