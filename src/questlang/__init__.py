"""QuestLang: a declarative language for branching quests and its runtime."""

from questlang.core.config import QuestLangConfig, load_config
from questlang.core.logging_config import configure_logging, configure_logging_from_config
from questlang.core.types import NodeKind, TokenKind
from questlang.data import (
    FileSystemHost,
    InMemoryHost,
    LexError,
    ModuleHost,
    ModuleLoadError,
    ModuleLoader,
    ParseError,
    QuestLangError,
    SourceLoadError,
    tokenize,
)
from questlang.domain.defs import (
    ActionNode,
    EndingNode,
    GraphDef,
    ImportDecl,
    InitialNode,
    ModuleDef,
    OptionChoice,
    QuestProgram,
    Token,
)
from questlang.domain.quest_state import ExecutionResult, QuestInfo, QuestState
from questlang.domain.validation import ValidationReport
from questlang.services import (
    QuestAnalysis,
    QuestInterpreter,
    analyze_quest,
    interpret,
    load_quest,
    parse,
    parse_any,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "ActionNode",
    "EndingNode",
    "ExecutionResult",
    "FileSystemHost",
    "GraphDef",
    "ImportDecl",
    "InMemoryHost",
    "InitialNode",
    "LexError",
    "ModuleDef",
    "ModuleHost",
    "ModuleLoadError",
    "ModuleLoader",
    "NodeKind",
    "OptionChoice",
    "ParseError",
    "QuestAnalysis",
    "QuestInfo",
    "QuestInterpreter",
    "QuestLangConfig",
    "QuestLangError",
    "QuestProgram",
    "QuestState",
    "SourceLoadError",
    "Token",
    "TokenKind",
    "ValidationReport",
    "analyze_quest",
    "configure_logging",
    "configure_logging_from_config",
    "interpret",
    "load_config",
    "load_quest",
    "parse",
    "parse_any",
    "tokenize",
    "validate",
]
