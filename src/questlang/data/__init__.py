"""Data layer: reading, lexing, parsing and loading quest sources."""

from .errors import LexError, ModuleLoadError, ParseError, QuestLangError, SourceLoadError
from .host import FileSystemHost, InMemoryHost, ModuleHost
from .lexer import Lexer, tokenize
from .module_loader import ExportResolution, LoadedModule, LoadResult, ModuleLoader, VisitState
from .parser import Parser, parse_any, parse_program

__all__ = [
    "ExportResolution",
    "FileSystemHost",
    "InMemoryHost",
    "LexError",
    "Lexer",
    "LoadResult",
    "LoadedModule",
    "ModuleHost",
    "ModuleLoadError",
    "ModuleLoader",
    "ParseError",
    "Parser",
    "QuestLangError",
    "SourceLoadError",
    "VisitState",
    "parse_any",
    "parse_program",
    "tokenize",
]
