"""Runtime quest state data structures."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple


@dataclass(frozen=True, slots=True)
class QuestState:
    """Position of a play session in the quest graph.

    Instances are never mutated; each transition produces a new state.
    """

    current_node: str
    history: Tuple[str, ...] = ()
    is_complete: bool = False
    ending_title: str | None = None

    @classmethod
    def initial(cls, start_node: str) -> "QuestState":
        return cls(current_node=start_node)

    def advanced_to(self, node_id: str, *, ending_title: str | None, is_ending: bool) -> "QuestState":
        """Return the state after moving to ``node_id``."""
        return replace(
            self,
            current_node=node_id,
            history=self.history + (self.current_node,),
            is_complete=is_ending,
            ending_title=ending_title if is_ending else None,
        )


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of a navigation request; ``error`` is set when ``success`` is False."""

    success: bool
    new_state: QuestState
    error: str | None = None


@dataclass(frozen=True, slots=True)
class QuestInfo:
    name: str
    goal: str
    is_complete: bool
