"""Runtime that walks a quest graph in response to player choices."""
from __future__ import annotations

import logging
from typing import List

from questlang.core.config import QuestLangConfig
from questlang.data.host import FileSystemHost, ModuleHost
from questlang.data.module_loader import ModuleLoader
from questlang.domain.defs import ActionNode, EndingNode, InitialNode, NodeDefinition, OptionChoice, QuestProgram
from questlang.domain.quest_state import ExecutionResult, QuestInfo, QuestState
from questlang.domain.references import module_of, qualify_target
from questlang.domain.validation import ValidationReport
from questlang.services.graph_validator import validate_quest_graph
from questlang.services.node_resolver import NodeResolver
from questlang.services.path_finder import find_all_paths

logger = logging.getLogger(__name__)


class QuestInterpreter:
    """Holds a parsed quest, its optional module registry and the play state.

    Navigation failures never raise; they come back as an unsuccessful
    :class:`ExecutionResult` with the state left untouched.
    """

    def __init__(
        self,
        program: QuestProgram,
        quest_file_path: str | None = None,
        host: ModuleHost | None = None,
        *,
        config: QuestLangConfig | None = None,
        module_loader: ModuleLoader | None = None,
    ) -> None:
        self._program = program
        self._config = config or QuestLangConfig()
        self._module_loader = module_loader
        if self._module_loader is None and quest_file_path and program.imports:
            self._module_loader = ModuleLoader(host or FileSystemHost())
            self._module_loader.load_imports(program, quest_file_path)
        self._resolver = NodeResolver(program, self._module_loader)
        self._state = QuestState.initial(program.graph.start)

    def get_state(self) -> QuestState:
        return self._state

    def get_quest_info(self) -> QuestInfo:
        return QuestInfo(
            name=self._program.name,
            goal=self._program.goal,
            is_complete=self._state.is_complete,
        )

    def get_program(self) -> QuestProgram:
        return self._program

    def get_module_loader(self) -> ModuleLoader | None:
        return self._module_loader

    def get_current_node(self) -> NodeDefinition | None:
        return self._resolver.resolve(self._state.current_node)

    def get_available_choices(self) -> List[OptionChoice]:
        """Options of the current node, or an empty list for non-action nodes."""
        node = self.get_current_node()
        if not isinstance(node, ActionNode):
            return []
        return list(node.options)

    def execute_choice(self, choice_index: int) -> ExecutionResult:
        """Follow option ``choice_index`` of the current action node."""
        node = self.get_current_node()
        if node is None:
            return self._failure(f"Current node '{self._state.current_node}' not found")
        if not isinstance(node, ActionNode):
            return self._failure(f"Cannot execute choice on node type '{node.kind.value}'")
        options = node.options
        if choice_index < 0 or choice_index >= len(options):
            return self._failure(
                f"Invalid choice index: {choice_index}. Available choices: 0-{len(options) - 1}"
            )
        target = qualify_target(options[choice_index].target, module_of(self._state.current_node))
        return self.move_to_node(target)

    def advance(self) -> ExecutionResult:
        """Follow the first transition of the current initial node."""
        node = self.get_current_node()
        if node is None:
            return self._failure(f"Current node '{self._state.current_node}' not found")
        if not isinstance(node, InitialNode):
            return self._failure(f"Cannot auto-advance from node type '{node.kind.value}'")
        if not node.transitions:
            return self._failure(f"Initial node '{node.id}' has no transitions")
        target = qualify_target(node.transitions[0], module_of(self._state.current_node))
        return self.move_to_node(target)

    def move_to_node(self, node_id: str) -> ExecutionResult:
        """Move to ``node_id``, a local id or ``@Module.node``."""
        target = self._resolver.resolve(node_id)
        if target is None:
            return self._failure(f"Target node '{node_id}' not found")
        is_ending = isinstance(target, EndingNode)
        self._state = self._state.advanced_to(
            node_id,
            ending_title=target.title if isinstance(target, EndingNode) else None,
            is_ending=is_ending,
        )
        logger.debug("Moved to %s (complete=%s)", node_id, is_ending)
        return ExecutionResult(success=True, new_state=self._state)

    def reset(self) -> None:
        self._state = QuestState.initial(self._program.graph.start)

    def get_all_paths(self) -> List[List[str]]:
        """Every path from the current node to an ending (diagnostic, exponential)."""
        return find_all_paths(
            self._resolver,
            self._state.current_node,
            max_paths=self._config.max_paths,
            max_depth=self._config.max_path_depth,
        )

    def validate(self) -> ValidationReport:
        return validate_quest_graph(self._program, self._resolver)

    def _failure(self, error: str) -> ExecutionResult:
        logger.debug("Navigation rejected: %s", error)
        return ExecutionResult(success=False, new_state=self._state, error=error)
