"""Cycle-tolerant module loader: parse every reachable file once, link later."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Tuple

from questlang.data.errors import ModuleLoadError
from questlang.data.host import ModuleHost
from questlang.data.lexer import tokenize
from questlang.data.parser import Parser
from questlang.domain.defs import ModuleDef, QuestProgram
from questlang.domain.references import parse_target, qualify_target
from questlang.domain.validation import ValidationReport

logger = logging.getLogger(__name__)


class VisitState(Enum):
    UNVISITED = "unvisited"
    VISITING = "visiting"
    VISITED = "visited"


@dataclass(frozen=True, slots=True)
class LoadedModule:
    name: str
    file: str
    ast: ModuleDef


@dataclass(frozen=True, slots=True)
class ExportResolution:
    ok: bool
    error: str | None = None


@dataclass(slots=True)
class LoadResult:
    program: QuestProgram
    modules: List[LoadedModule] = field(default_factory=list)


class ModuleLoader:
    """Builds a registry of modules reachable from a quest's imports.

    Files are keyed by the path the host resolves them to. Import cycles are
    allowed: reaching a file that is still being walked ends that branch.
    The registry is add-only; when two files declare the same module name the
    first one registered answers name lookups.
    """

    def __init__(self, host: ModuleHost) -> None:
        self._host = host
        self._by_file: Dict[str, LoadedModule] = {}
        self._by_name: Dict[str, LoadedModule] = {}
        self._visit: Dict[str, VisitState] = {}
        self._name_collisions: List[LoadedModule] = []

    def load_quest(self, quest_file: str) -> LoadResult:
        """Read and parse ``quest_file`` as a program, then load its imports."""
        source = self._host.read_file(quest_file)
        program = Parser(tokenize(source)).parse()
        modules = self.load_imports(program, quest_file)
        return LoadResult(program=program, modules=modules)

    def load_imports(self, program: QuestProgram, quest_file: str) -> List[LoadedModule]:
        """Walk the imports of an already parsed program."""
        for declaration in program.imports:
            self._walk(self._host.resolve(quest_file, declaration.module_path))
        logger.debug("Loaded %d modules for quest %s", len(self._by_file), program.name)
        return self.get_all_modules()

    def _walk(self, root_file: str) -> None:
        if self._state(root_file) is not VisitState.UNVISITED:
            return
        stack: List[Tuple[str, Iterator[str]]] = [self._enter(root_file)]
        while stack:
            file, dependencies = stack[-1]
            dependency = next(dependencies, None)
            if dependency is None:
                self._visit[file] = VisitState.VISITED
                stack.pop()
                continue
            state = self._state(dependency)
            if state is VisitState.VISITING:
                logger.debug("Import cycle through %s (from %s)", dependency, file)
                continue
            if state is VisitState.VISITED:
                continue
            stack.append(self._enter(dependency))

    def _enter(self, file: str) -> Tuple[str, Iterator[str]]:
        self._visit[file] = VisitState.VISITING
        loaded = self._by_file.get(file)
        if loaded is None:
            loaded = self._register(file, self._parse_module(file))
        return file, self._dependencies(loaded)

    def _dependencies(self, loaded: LoadedModule) -> Iterator[str]:
        for declaration in loaded.ast.imports:
            yield self._host.resolve(loaded.file, declaration.module_path)

    def _parse_module(self, file: str) -> ModuleDef:
        source = self._host.read_file(file)
        parsed = Parser(tokenize(source)).parse_any()
        if not isinstance(parsed, ModuleDef):
            raise ModuleLoadError(f"Expected module in {file}")
        return parsed

    def _register(self, file: str, ast: ModuleDef) -> LoadedModule:
        loaded = LoadedModule(name=ast.name, file=file, ast=ast)
        self._by_file[file] = loaded
        existing = self._by_name.get(ast.name)
        if existing is None:
            self._by_name[ast.name] = loaded
        else:
            self._name_collisions.append(loaded)
            logger.warning(
                "Module name '%s' in %s is already declared by %s; lookups use %s",
                ast.name,
                file,
                existing.file,
                existing.file,
            )
        logger.debug("Registered module %s from %s", ast.name, file)
        return loaded

    def _state(self, file: str) -> VisitState:
        return self._visit.get(file, VisitState.UNVISITED)

    def resolve_export(self, module_name: str, node_id: str) -> ExportResolution:
        """Check that ``module_name`` is loaded and exports an existing ``node_id``."""
        loaded = self.get_module_by_name(module_name)
        if loaded is None:
            return ExportResolution(False, f"Module '{module_name}' not found")
        if node_id not in loaded.ast.nodes:
            return ExportResolution(False, f"Module '{module_name}' has no node '{node_id}'")
        if not loaded.ast.is_exported(node_id):
            return ExportResolution(False, f"Node '{node_id}' is not exported by module '{module_name}'")
        return ExportResolution(True)

    def get_module_by_name(self, name: str) -> LoadedModule | None:
        return self._by_name.get(name)

    def get_module_by_file(self, file: str) -> LoadedModule | None:
        return self._by_file.get(file)

    def get_all_modules(self) -> List[LoadedModule]:
        return list(self._by_file.values())

    def validate_modules(self) -> ValidationReport:
        """Report missing exports and node targets that do not resolve.

        Local targets inside a module are checked as @Module.node, so they
        must be exported like any other cross-module target. Name collisions
        are warnings.
        """
        report = ValidationReport()
        for loaded in self._by_file.values():
            for export in loaded.ast.exports:
                if export not in loaded.ast.nodes:
                    report.errors.append(f"Module {loaded.name}: exported node '{export}' does not exist")
            if self._by_name.get(loaded.name) is loaded:
                self._check_node_targets(loaded, report)
            for node_id in loaded.ast.duplicate_ids:
                report.warnings.append(
                    f"Module {loaded.name}: node '{node_id}' is declared more than once; the last declaration is used"
                )
        for loaded in self._name_collisions:
            winner = self._by_name[loaded.name]
            report.warnings.append(
                f"Module name '{loaded.name}' in {loaded.file} is shadowed by {winner.file}"
            )
        return report

    def _check_node_targets(self, loaded: LoadedModule, report: ValidationReport) -> None:
        for node_id, node in loaded.ast.nodes.items():
            for raw in node.targets():
                target = qualify_target(raw, loaded.name)
                ref = parse_target(target)
                if not ref.valid or ref.module is None:
                    reason = f"Invalid module reference '{target}'"
                else:
                    reason = self.resolve_export(ref.module, ref.node_id).error
                if reason is not None:
                    report.errors.append(f"Module {loaded.name}: node '{node_id}' references '{target}': {reason}")
