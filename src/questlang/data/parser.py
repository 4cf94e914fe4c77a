"""Recursive-descent parser for quest programs and modules."""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple, Union

from questlang.core.types import NODE_KIND_BY_TOKEN, NodeKind, TokenKind
from questlang.data.errors import ParseError
from questlang.domain.defs import (
    ActionNode,
    EndingNode,
    GraphDef,
    ImportDecl,
    InitialNode,
    ModuleDef,
    NodeDefinition,
    OptionChoice,
    QuestProgram,
    Token,
)
from questlang.domain.references import make_qualified

logger = logging.getLogger(__name__)

ParsedSource = Union[QuestProgram, ModuleDef]


class Parser:
    """Consumes a token stream and builds the AST.

    The first grammar violation raises :class:`ParseError`; there is no
    recovery. COMMENT tokens are dropped before parsing.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens: List[Token] = [token for token in tokens if token.kind is not TokenKind.COMMENT]
        if not self._tokens or self._tokens[-1].kind is not TokenKind.EOF:
            last = self._tokens[-1] if self._tokens else None
            line = last.line if last else 1
            column = last.column if last else 1
            offset = last.end if last else 0
            self._tokens.append(Token(TokenKind.EOF, "", line, column, offset, offset))
        self._current = 0

    def parse(self) -> QuestProgram:
        """Parse the stream strictly as a quest program."""
        return self._parse_quest()

    def parse_any(self) -> ParsedSource:
        """Parse a module when the stream opens with ``module``, else a quest."""
        if self._check(TokenKind.MODULE):
            return self._parse_module()
        return self._parse_quest()

    # -- top level -------------------------------------------------------

    def _parse_quest(self) -> QuestProgram:
        quest_token = self._consume(TokenKind.QUEST, "Expected 'quest'")
        name = self._consume(TokenKind.IDENTIFIER, "Expected quest name").value
        self._consume(TokenKind.SEMICOLON, "Expected ';' after quest name")

        goal = self._parse_goal()
        imports = self._parse_imports()
        graph = self._parse_graph()

        self._consume(TokenKind.END, "Expected 'end'")
        self._consume(TokenKind.SEMICOLON, "Expected ';' after 'end'")
        logger.debug("Parsed quest %s with %d nodes", name, len(graph.nodes))
        return QuestProgram(
            name=name,
            goal=goal,
            graph=graph,
            imports=tuple(imports),
            line=quest_token.line,
            column=quest_token.column,
        )

    def _parse_module(self) -> ModuleDef:
        module_token = self._consume(TokenKind.MODULE, "Expected 'module'")
        name = self._consume(TokenKind.IDENTIFIER, "Expected module name").value
        self._consume(TokenKind.SEMICOLON, "Expected ';' after module name")

        nodes: Dict[str, NodeDefinition] = {}
        duplicates: List[str] = []
        exports: Tuple[str, ...] = ()
        imports: List[ImportDecl] = []

        while not self._is_at_end():
            if self._check(TokenKind.IMPORT):
                imports.extend(self._parse_imports())
            elif self._match(TokenKind.NODES):
                self._parse_nodes(nodes, duplicates)
            elif self._match(TokenKind.EXPORT):
                exports = self._parse_exports()
            else:
                raise self._unexpected("module")

        self._warn_duplicates(f"module {name}", duplicates)
        logger.debug("Parsed module %s with %d nodes and %d exports", name, len(nodes), len(exports))
        return ModuleDef(
            name=name,
            nodes=nodes,
            exports=exports,
            imports=tuple(imports),
            duplicate_ids=tuple(duplicates),
            line=module_token.line,
            column=module_token.column,
        )

    def _parse_goal(self) -> str:
        self._consume(TokenKind.GOAL, "Expected 'goal'")
        goal = self._consume(TokenKind.STRING, "Expected goal description").value
        self._consume(TokenKind.SEMICOLON, "Expected ';' after goal")
        return goal

    def _parse_imports(self) -> List[ImportDecl]:
        imports: List[ImportDecl] = []
        while self._match(TokenKind.IMPORT):
            import_token = self._previous()
            module_name = self._consume(TokenKind.IDENTIFIER, "Expected module name").value
            self._consume(TokenKind.FROM, "Expected 'from'")
            module_path = self._consume(TokenKind.STRING, "Expected module path").value
            self._consume(TokenKind.SEMICOLON, "Expected ';' after import")
            imports.append(
                ImportDecl(
                    module_name=module_name,
                    module_path=module_path,
                    line=import_token.line,
                    column=import_token.column,
                )
            )
        return imports

    def _parse_graph(self) -> GraphDef:
        graph_token = self._consume(TokenKind.GRAPH, "Expected 'graph'")
        self._consume(TokenKind.LEFT_BRACE, "Expected '{' after 'graph'")

        nodes: Dict[str, NodeDefinition] = {}
        duplicates: List[str] = []
        start = ""
        while not self._check(TokenKind.RIGHT_BRACE) and not self._is_at_end():
            if self._match(TokenKind.NODES):
                self._parse_nodes(nodes, duplicates)
            elif self._match(TokenKind.START):
                self._consume(TokenKind.COLON, "Expected ':' after 'start'")
                start = self._consume(TokenKind.IDENTIFIER, "Expected start node identifier").value
                self._consume(TokenKind.SEMICOLON, "Expected ';' after start node")
            else:
                raise self._unexpected("graph")

        self._consume(TokenKind.RIGHT_BRACE, "Expected '}' after graph body")
        self._warn_duplicates("graph", duplicates)
        return GraphDef(
            nodes=nodes,
            start=start,
            duplicate_ids=tuple(duplicates),
            line=graph_token.line,
            column=graph_token.column,
        )

    def _parse_exports(self) -> Tuple[str, ...]:
        self._consume(TokenKind.LEFT_BRACKET, "Expected '[' after 'export'")
        exports: List[str] = []
        if not self._check(TokenKind.RIGHT_BRACKET):
            exports.append(self._consume(TokenKind.IDENTIFIER, "Expected exported node identifier").value)
            while self._match(TokenKind.COMMA):
                exports.append(self._consume(TokenKind.IDENTIFIER, "Expected exported node identifier").value)
        self._consume(TokenKind.RIGHT_BRACKET, "Expected ']' after export list")
        self._consume(TokenKind.SEMICOLON, "Expected ';' after export list")
        return tuple(exports)

    # -- nodes -----------------------------------------------------------

    def _parse_nodes(self, nodes: Dict[str, NodeDefinition], duplicates: List[str]) -> None:
        self._consume(TokenKind.LEFT_BRACE, "Expected '{' after 'nodes'")
        while not self._check(TokenKind.RIGHT_BRACE) and not self._is_at_end():
            node_id = self._consume(TokenKind.IDENTIFIER, "Expected node identifier").value
            self._consume(TokenKind.COLON, "Expected ':' after node identifier")
            self._consume(TokenKind.LEFT_BRACE, "Expected '{' after node identifier")
            if node_id in nodes:
                duplicates.append(node_id)
            nodes[node_id] = self._parse_node_definition(node_id)
            self._consume(TokenKind.RIGHT_BRACE, "Expected '}' after node definition")
        self._consume(TokenKind.RIGHT_BRACE, "Expected '}' after nodes")

    def _parse_node_definition(self, node_id: str) -> NodeDefinition:
        start_token = self._peek()
        node_kind = NodeKind.ACTION
        description = ""
        title = ""
        transitions: Tuple[str, ...] = ()
        options: Tuple[OptionChoice, ...] = ()

        while not self._check(TokenKind.RIGHT_BRACE) and not self._is_at_end():
            if self._match(TokenKind.TYPE):
                self._consume(TokenKind.COLON, "Expected ':' after 'type'")
                type_token = self._advance()
                resolved = NODE_KIND_BY_TOKEN.get(type_token.kind)
                if resolved is None:
                    raise ParseError(
                        f"Invalid node type: {type_token.value} at {type_token.line}:{type_token.column}",
                        type_token.line,
                        type_token.column,
                        expected="node type",
                        got=type_token.kind.value,
                    )
                node_kind = resolved
                self._consume(TokenKind.SEMICOLON, "Expected ';' after node type")
            elif self._match(TokenKind.DESCRIPTION):
                self._consume(TokenKind.COLON, "Expected ':' after 'description'")
                description = self._consume(TokenKind.STRING, "Expected description string").value
                self._consume(TokenKind.SEMICOLON, "Expected ';' after description")
            elif self._match(TokenKind.TRANSITIONS):
                self._consume(TokenKind.COLON, "Expected ':' after 'transitions'")
                transitions = self._parse_transitions()
            elif self._match(TokenKind.OPTIONS):
                self._consume(TokenKind.COLON, "Expected ':' after 'options'")
                options = self._parse_options()
            elif self._match(TokenKind.TITLE):
                self._consume(TokenKind.COLON, "Expected ':' after 'title'")
                title = self._consume(TokenKind.STRING, "Expected title string").value
                self._consume(TokenKind.SEMICOLON, "Expected ';' after title")
            else:
                raise self._unexpected("node definition")

        line, column = start_token.line, start_token.column
        if node_kind is NodeKind.INITIAL:
            return InitialNode(node_id, description, transitions, line, column)
        if node_kind is NodeKind.ENDING:
            return EndingNode(node_id, description, title, line, column)
        return ActionNode(node_id, description, options, line, column)

    def _parse_transitions(self) -> Tuple[str, ...]:
        self._consume(TokenKind.LEFT_BRACKET, "Expected '[' for transitions")
        transitions: List[str] = []
        if not self._check(TokenKind.RIGHT_BRACKET):
            transitions.append(self._parse_target())
            while self._match(TokenKind.COMMA):
                transitions.append(self._parse_target())
        self._consume(TokenKind.RIGHT_BRACKET, "Expected ']' after transitions")
        self._consume(TokenKind.SEMICOLON, "Expected ';' after transitions")
        return tuple(transitions)

    def _parse_options(self) -> Tuple[OptionChoice, ...]:
        self._consume(TokenKind.LEFT_BRACKET, "Expected '[' for options")
        options: List[OptionChoice] = []
        if not self._check(TokenKind.RIGHT_BRACKET):
            options.append(self._parse_option())
            while self._match(TokenKind.COMMA):
                options.append(self._parse_option())
        self._consume(TokenKind.RIGHT_BRACKET, "Expected ']' after options")
        self._consume(TokenKind.SEMICOLON, "Expected ';' after options")
        return tuple(options)

    def _parse_option(self) -> OptionChoice:
        option_token = self._consume(TokenKind.LEFT_PAREN, "Expected '(' for option")
        text = self._consume(TokenKind.STRING, "Expected option text").value
        self._consume(TokenKind.COMMA, "Expected ',' in option")
        target = self._parse_target()
        self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after option")
        return OptionChoice(text=text, target=target, line=option_token.line, column=option_token.column)

    def _parse_target(self) -> str:
        """Parse ``node`` or ``@Module.node`` into one raw string."""
        if self._match(TokenKind.AT):
            module_name = self._consume(TokenKind.IDENTIFIER, "Expected module name after '@'").value
            self._consume(TokenKind.DOT, "Expected '.' after module name")
            node_id = self._consume(TokenKind.IDENTIFIER, "Expected node identifier after module name").value
            return make_qualified(module_name, node_id)
        return self._consume(TokenKind.IDENTIFIER, "Expected target identifier").value

    # -- token helpers ---------------------------------------------------

    def _match(self, kind: TokenKind) -> bool:
        if self._check(kind):
            self._advance()
            return True
        return False

    def _check(self, kind: TokenKind) -> bool:
        if self._is_at_end():
            return False
        return self._peek().kind is kind

    def _advance(self) -> Token:
        if not self._is_at_end():
            self._current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().kind is TokenKind.EOF

    def _peek(self) -> Token:
        return self._tokens[self._current]

    def _previous(self) -> Token:
        return self._tokens[max(self._current - 1, 0)]

    def _consume(self, kind: TokenKind, message: str) -> Token:
        if self._check(kind):
            return self._advance()
        current = self._peek()
        raise ParseError(
            f"{message}. Got {current.describe()}",
            current.line,
            current.column,
            expected=kind.value,
            got=current.kind.value,
        )

    def _unexpected(self, context: str) -> ParseError:
        current = self._peek()
        return ParseError(
            f"Unexpected token in {context}: {current.describe()}",
            current.line,
            current.column,
            got=current.kind.value,
        )

    @staticmethod
    def _warn_duplicates(context: str, duplicates: Sequence[str]) -> None:
        for node_id in duplicates:
            logger.warning("Node '%s' is declared more than once in %s; the last declaration is used", node_id, context)


def parse_program(tokens: Sequence[Token]) -> QuestProgram:
    return Parser(tokens).parse()


def parse_any(tokens: Sequence[Token]) -> ParsedSource:
    return Parser(tokens).parse_any()
