"""Resolution of local and module-qualified targets to node definitions."""
from __future__ import annotations

from typing import Iterator, Tuple

from questlang.data.module_loader import ModuleLoader
from questlang.domain.defs import NodeDefinition, QuestProgram
from questlang.domain.references import make_qualified, module_of, parse_target, qualify_target


class NodeResolver:
    """Looks targets up in the quest graph or, for ``@Module.node``, in the registry.

    Qualified targets only resolve when the module is loaded and exports the
    node. Local targets written inside a module node are qualified with that
    module's name, so the same export rule applies to them.
    """

    def __init__(self, program: QuestProgram, module_loader: ModuleLoader | None = None) -> None:
        self._program = program
        self._module_loader = module_loader

    def resolve(self, target: str) -> NodeDefinition | None:
        ref = parse_target(target)
        if not ref.is_qualified:
            return self._program.graph.nodes.get(target)
        if not ref.valid or self._module_loader is None or ref.module is None:
            return None
        if not self._module_loader.resolve_export(ref.module, ref.node_id).ok:
            return None
        loaded = self._module_loader.get_module_by_name(ref.module)
        if loaded is None:
            return None
        return loaded.ast.nodes.get(ref.node_id)

    def explain(self, target: str) -> str | None:
        """Return the module-level reason a qualified target does not resolve.

        ``None`` means the caller should report a plain missing target.
        """
        ref = parse_target(target)
        if not ref.is_qualified or self._module_loader is None:
            return None
        if not ref.valid or ref.module is None:
            return f"Invalid module reference '{target}'"
        return self._module_loader.resolve_export(ref.module, ref.node_id).error

    def outgoing(self, node_id: str, node: NodeDefinition) -> Tuple[str, ...]:
        """Targets leaving ``node``, qualified with the module ``node_id`` lives in."""
        context = module_of(node_id)
        return tuple(qualify_target(target, context) for target in node.targets())

    def module_nodes(self) -> Iterator[Tuple[str, NodeDefinition]]:
        """Yield ``(@Module.node, node)`` for every module that answers name lookups."""
        if self._module_loader is None:
            return
        for loaded in self._module_loader.get_all_modules():
            if self._module_loader.get_module_by_name(loaded.name) is not loaded:
                continue
            for node_id, node in loaded.ast.nodes.items():
                yield make_qualified(loaded.name, node_id), node
