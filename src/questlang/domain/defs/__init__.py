"""Domain definition exports."""

from .node_def import ActionNode, EndingNode, InitialNode, NodeDefinition, OptionChoice
from .program_def import GraphDef, ImportDecl, ModuleDef, QuestProgram
from .token_def import Token

__all__ = [
    "ActionNode",
    "EndingNode",
    "GraphDef",
    "ImportDecl",
    "InitialNode",
    "ModuleDef",
    "NodeDefinition",
    "OptionChoice",
    "QuestProgram",
    "Token",
]
