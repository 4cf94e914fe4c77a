"""Node definitions that make up a quest or module graph."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from questlang.core.types import NodeKind


@dataclass(frozen=True, slots=True)
class OptionChoice:
    """Selectable option on an action node."""

    text: str
    target: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True, slots=True)
class InitialNode:
    """Entry node; the first transition is the auto-advance default."""

    id: str
    description: str = ""
    transitions: Tuple[str, ...] = ()
    line: int = 0
    column: int = 0

    @property
    def kind(self) -> NodeKind:
        return NodeKind.INITIAL

    def targets(self) -> Tuple[str, ...]:
        return self.transitions


@dataclass(frozen=True, slots=True)
class ActionNode:
    """Branch point with ordered, index-addressed options."""

    id: str
    description: str = ""
    options: Tuple[OptionChoice, ...] = ()
    line: int = 0
    column: int = 0

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ACTION

    def targets(self) -> Tuple[str, ...]:
        return tuple(option.target for option in self.options)


@dataclass(frozen=True, slots=True)
class EndingNode:
    """Terminal node carrying the ending title."""

    id: str
    description: str = ""
    title: str = ""
    line: int = 0
    column: int = 0

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ENDING

    def targets(self) -> Tuple[str, ...]:
        return ()


NodeDefinition = Union[InitialNode, ActionNode, EndingNode]
