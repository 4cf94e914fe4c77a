"""Service layer exports."""

from .graph_validator import find_reachable_nodes, validate_quest_graph
from .interpreter import QuestInterpreter
from .node_resolver import NodeResolver
from .path_finder import find_all_paths
from .quest_analysis import QuestAnalysis, analyze_quest
from .quest_lang import interpret, load_quest, parse, parse_any, validate

__all__ = [
    "NodeResolver",
    "QuestAnalysis",
    "QuestInterpreter",
    "analyze_quest",
    "find_all_paths",
    "find_reachable_nodes",
    "interpret",
    "load_quest",
    "parse",
    "parse_any",
    "validate",
    "validate_quest_graph",
]
