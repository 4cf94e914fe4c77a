"""Entry points used by tools embedding QuestLang."""
from __future__ import annotations

import logging
from pathlib import Path

from questlang.core.config import QuestLangConfig
from questlang.data.errors import QuestLangError
from questlang.data.host import FileSystemHost, ModuleHost
from questlang.data.lexer import tokenize
from questlang.data.module_loader import ModuleLoader
from questlang.data.parser import ParsedSource, Parser
from questlang.domain.defs import QuestProgram
from questlang.domain.validation import ValidationReport
from questlang.services.interpreter import QuestInterpreter

logger = logging.getLogger(__name__)


def parse(source: str) -> QuestProgram:
    """Parse quest source text; raises LexError or ParseError."""
    return Parser(tokenize(source)).parse()


def parse_any(source: str) -> ParsedSource:
    """Parse either a quest program or a module."""
    return Parser(tokenize(source)).parse_any()


def interpret(
    source: str,
    file_path: str | Path | None = None,
    host: ModuleHost | None = None,
    config: QuestLangConfig | None = None,
) -> QuestInterpreter:
    """Build an interpreter; imports are loaded relative to ``file_path``."""
    program = parse(source)
    return QuestInterpreter(
        program,
        str(file_path) if file_path is not None else None,
        host,
        config=config,
    )


def validate(
    source: str,
    file_path: str | Path | None = None,
    host: ModuleHost | None = None,
) -> ValidationReport:
    """Validate quest source; parse and load failures become the single error."""
    try:
        interpreter = interpret(source, file_path, host)
    except (QuestLangError, OSError) as exc:
        logger.debug("Validation aborted: %s", exc)
        return ValidationReport.from_exception(exc)
    return interpreter.validate()


def load_quest(
    path: str | Path,
    host: ModuleHost | None = None,
    config: QuestLangConfig | None = None,
) -> QuestInterpreter:
    """Read ``path`` through the host, parse it and load its modules."""
    loader = ModuleLoader(host or FileSystemHost())
    result = loader.load_quest(str(path))
    return QuestInterpreter(result.program, str(path), config=config, module_loader=loader)
