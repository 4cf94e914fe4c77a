"""Exhaustive path enumeration from a node to every reachable ending."""
from __future__ import annotations

import logging
from typing import FrozenSet, List, Tuple

from questlang.domain.defs import EndingNode
from questlang.services.node_resolver import NodeResolver

logger = logging.getLogger(__name__)


def find_all_paths(
    resolver: NodeResolver,
    start: str,
    *,
    max_paths: int | None = None,
    max_depth: int | None = None,
) -> List[List[str]]:
    """Return one node-id path per ending reachable from ``start``.

    Each outgoing edge continues with its own copy of the visited set, so
    diamond-shaped graphs yield every distinct path while cycles are cut.
    Cost grows exponentially with branching; ``max_paths`` stops after that
    many paths and ``max_depth`` drops branches longer than that many nodes.
    """
    paths: List[List[str]] = []
    stack: List[Tuple[str, Tuple[str, ...], FrozenSet[str]]] = [(start, (start,), frozenset())]
    depth_cut = False

    while stack:
        node_id, path, visited = stack.pop()
        if node_id in visited:
            continue
        node = resolver.resolve(node_id)
        if node is None:
            continue
        if isinstance(node, EndingNode):
            paths.append(list(path))
            if max_paths is not None and len(paths) >= max_paths:
                if stack:
                    logger.warning("Path enumeration stopped after %d paths", max_paths)
                break
            continue
        if max_depth is not None and len(path) >= max_depth:
            depth_cut = True
            continue
        branch_visited = visited | {node_id}
        for target in reversed(resolver.outgoing(node_id, node)):
            stack.append((target, path + (target,), branch_visited))

    if depth_cut:
        logger.warning("Path enumeration skipped branches longer than %d nodes", max_depth)
    return paths
