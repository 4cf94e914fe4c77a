"""Decomposition of raw node targets into local or module-qualified references.

Targets are stored as one string at parse time: ``node`` for a local node or
``@Module.node`` for a node exported by another module. Every consumer goes
through :func:`parse_target` rather than slicing the string itself.
"""
from __future__ import annotations

from dataclasses import dataclass

QUALIFIED_PREFIX = "@"


@dataclass(frozen=True, slots=True)
class NodeRef:
    """Decomposed target.

    ``module`` is ``None`` for local targets. ``valid`` is ``False`` for a
    qualified target without a ``.`` separator.
    """

    raw: str
    node_id: str
    module: str | None = None
    valid: bool = True

    @property
    def is_qualified(self) -> bool:
        return self.raw.startswith(QUALIFIED_PREFIX)


def parse_target(raw: str) -> NodeRef:
    """Split ``raw`` into its module and node parts."""
    if not raw.startswith(QUALIFIED_PREFIX):
        return NodeRef(raw=raw, node_id=raw)
    body = raw[len(QUALIFIED_PREFIX):]
    module, dot, node_id = body.partition(".")
    if not dot:
        return NodeRef(raw=raw, node_id="", module=module, valid=False)
    return NodeRef(raw=raw, node_id=node_id, module=module)


def make_qualified(module: str, node_id: str) -> str:
    return f"{QUALIFIED_PREFIX}{module}.{node_id}"


def qualify_target(raw: str, context_module: str | None) -> str:
    """Qualify a local target written inside ``context_module``.

    Qualified targets and targets outside any module are returned unchanged.
    """
    if context_module is None or raw.startswith(QUALIFIED_PREFIX):
        return raw
    return make_qualified(context_module, raw)


def module_of(raw: str) -> str | None:
    """Return the module a target lives in, or ``None`` for local targets."""
    ref = parse_target(raw)
    return ref.module if ref.is_qualified and ref.valid else None
