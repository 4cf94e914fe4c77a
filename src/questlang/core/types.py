"""Shared enums and the keyword table for the core and domain layers."""
from __future__ import annotations

from enum import Enum
from typing import Dict


class TokenKind(Enum):
    """Closed set of token kinds produced by the lexer."""

    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    QUEST = "QUEST"
    GOAL = "GOAL"
    GRAPH = "GRAPH"
    NODES = "NODES"
    START = "START"
    END = "END"
    TYPE = "TYPE"
    DESCRIPTION = "DESCRIPTION"
    TRANSITIONS = "TRANSITIONS"
    OPTIONS = "OPTIONS"
    TITLE = "TITLE"
    MODULE = "MODULE"
    IMPORT = "IMPORT"
    EXPORT = "EXPORT"
    FROM = "FROM"
    INITIAL = "INITIAL"
    ACTION = "ACTION"
    ENDING = "ENDING"

    SEMICOLON = "SEMICOLON"
    COLON = "COLON"
    COMMA = "COMMA"
    DOT = "DOT"
    AT = "AT"
    LEFT_BRACE = "LEFT_BRACE"
    RIGHT_BRACE = "RIGHT_BRACE"
    LEFT_BRACKET = "LEFT_BRACKET"
    RIGHT_BRACKET = "RIGHT_BRACKET"
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"

    COMMENT = "COMMENT"
    EOF = "EOF"


class NodeKind(Enum):
    """The three node variants a graph may contain."""

    INITIAL = "initial"
    ACTION = "action"
    ENDING = "ending"


# Each keyword kind accepts its Russian spelling and an English alias.
KEYWORDS: Dict[str, TokenKind] = {
    "квест": TokenKind.QUEST,
    "цель": TokenKind.GOAL,
    "граф": TokenKind.GRAPH,
    "узлы": TokenKind.NODES,
    "начало": TokenKind.START,
    "конец": TokenKind.END,
    "тип": TokenKind.TYPE,
    "описание": TokenKind.DESCRIPTION,
    "переходы": TokenKind.TRANSITIONS,
    "варианты": TokenKind.OPTIONS,
    "название": TokenKind.TITLE,
    "модуль": TokenKind.MODULE,
    "импорт": TokenKind.IMPORT,
    "экспорт": TokenKind.EXPORT,
    "из": TokenKind.FROM,
    "начальный": TokenKind.INITIAL,
    "действие": TokenKind.ACTION,
    "концовка": TokenKind.ENDING,
    "quest": TokenKind.QUEST,
    "goal": TokenKind.GOAL,
    "graph": TokenKind.GRAPH,
    "nodes": TokenKind.NODES,
    "start": TokenKind.START,
    "end": TokenKind.END,
    "type": TokenKind.TYPE,
    "description": TokenKind.DESCRIPTION,
    "transitions": TokenKind.TRANSITIONS,
    "options": TokenKind.OPTIONS,
    "title": TokenKind.TITLE,
    "module": TokenKind.MODULE,
    "import": TokenKind.IMPORT,
    "export": TokenKind.EXPORT,
    "from": TokenKind.FROM,
    "initial": TokenKind.INITIAL,
    "action": TokenKind.ACTION,
    "ending": TokenKind.ENDING,
}

SYMBOLS: Dict[str, TokenKind] = {
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "@": TokenKind.AT,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
}

NODE_KIND_BY_TOKEN: Dict[TokenKind, NodeKind] = {
    TokenKind.INITIAL: NodeKind.INITIAL,
    TokenKind.ACTION: NodeKind.ACTION,
    TokenKind.ENDING: NodeKind.ENDING,
}

__all__ = ["KEYWORDS", "NODE_KIND_BY_TOKEN", "NodeKind", "SYMBOLS", "TokenKind"]
