"""Structural statistics for a quest: node counts, path lengths and validity."""
from __future__ import annotations

from dataclasses import dataclass

from questlang.domain.defs import ActionNode, EndingNode, InitialNode
from questlang.domain.validation import ValidationReport
from questlang.services.interpreter import QuestInterpreter


@dataclass(slots=True)
class QuestAnalysis:
    name: str
    total_nodes: int
    initial_nodes: int
    action_nodes: int
    ending_nodes: int
    path_count: int
    average_path_length: float | None
    shortest_path: int | None
    longest_path: int | None
    validation: ValidationReport


def analyze_quest(interpreter: QuestInterpreter) -> QuestAnalysis:
    """Summarize the quest graph; path statistics start at the current node."""
    nodes = list(interpreter.get_program().graph.nodes.values())
    paths = interpreter.get_all_paths()
    lengths = [len(path) for path in paths]
    return QuestAnalysis(
        name=interpreter.get_program().name,
        total_nodes=len(nodes),
        initial_nodes=sum(1 for node in nodes if isinstance(node, InitialNode)),
        action_nodes=sum(1 for node in nodes if isinstance(node, ActionNode)),
        ending_nodes=sum(1 for node in nodes if isinstance(node, EndingNode)),
        path_count=len(paths),
        average_path_length=sum(lengths) / len(lengths) if lengths else None,
        shortest_path=min(lengths) if lengths else None,
        longest_path=max(lengths) if lengths else None,
        validation=interpreter.validate(),
    )
