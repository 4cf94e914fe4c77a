"""Static quest graph validation: start node, references and reachability."""
from __future__ import annotations

import logging
from typing import List, Set

from questlang.domain.defs import ActionNode, EndingNode, InitialNode, NodeDefinition, QuestProgram
from questlang.domain.references import module_of, qualify_target
from questlang.domain.validation import ValidationReport
from questlang.services.node_resolver import NodeResolver

logger = logging.getLogger(__name__)


def validate_quest_graph(program: QuestProgram, resolver: NodeResolver) -> ValidationReport:
    """Validate ``program`` and return errors in a stable order.

    Order: start node check, reference checks per node in declaration order,
    reference checks for module nodes reachable from the start, then
    unreachable nodes in declaration order. Duplicate node ids are reported
    as warnings.
    """
    report = ValidationReport()
    graph = program.graph

    for node_id in graph.duplicate_ids:
        report.warnings.append(f"Node '{node_id}' is declared more than once; the last declaration is used")

    if resolver.resolve(graph.start) is None:
        report.errors.append(f"Start node '{graph.start}' does not exist")

    for node_id, node in graph.nodes.items():
        _validate_node_references(node_id, node, resolver, report.errors)

    reachable = find_reachable_nodes(graph.start, resolver)
    for node_id, node in resolver.module_nodes():
        if node_id in reachable:
            _validate_node_references(node_id, node, resolver, report.errors)

    for node_id in graph.nodes:
        if node_id not in reachable:
            report.errors.append(f"Node '{node_id}' is unreachable")

    logger.debug(
        "Validated quest %s: errors=%d warnings=%d",
        program.name,
        len(report.errors),
        len(report.warnings),
    )
    return report


def _validate_node_references(
    node_id: str, node: NodeDefinition, resolver: NodeResolver, errors: List[str]
) -> None:
    context = module_of(node_id)
    if isinstance(node, ActionNode):
        for option in node.options:
            target = qualify_target(option.target, context)
            if resolver.resolve(target) is None:
                reason = resolver.explain(target)
                errors.append(reason or f"Node '{node_id}' references non-existent target '{target}'")
    elif isinstance(node, InitialNode):
        for transition in node.transitions:
            target = qualify_target(transition, context)
            if resolver.resolve(target) is None:
                reason = resolver.explain(target)
                errors.append(
                    reason or f"Initial node '{node_id}' references non-existent transition '{target}'"
                )
    elif isinstance(node, EndingNode):
        return
    else:
        raise TypeError(f"Unsupported node definition: {node!r}")


def find_reachable_nodes(start: str, resolver: NodeResolver) -> Set[str]:
    """Return every node id reachable from ``start``.

    One visited set is shared across the traversal, so cycles are safe and
    each node is expanded once. Endings have no outgoing edges.
    """
    reachable: Set[str] = set()
    stack: List[str] = [start]
    while stack:
        node_id = stack.pop()
        if node_id in reachable:
            continue
        node = resolver.resolve(node_id)
        if node is None:
            continue
        reachable.add(node_id)
        for target in resolver.outgoing(node_id, node):
            if target not in reachable:
                stack.append(target)
    return reachable
