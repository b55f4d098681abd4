"""Explicit handler registration.

Handlers are plain callables bound to node ids together with the positions of
the build-time parameters they receive. Bindings are resolved once, when the
workflow is built, and never re-scanned while it runs.

Two ways to populate a registry::

    registry = HandlerRegistry()
    registry.register_decision(("B", "G"), check_amount, params=(1,))

or, for a host object whose methods carry the marker decorators below::

    class Approval:
        @decision_node("B", "G", params=(1,))
        def check_amount(self, amount: int) -> bool: ...

    registry = HandlerRegistry.from_host(Approval())
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from decisive_flow.errors import BindingError
from decisive_flow.graph.outcomes import NodeId

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_SPEC_ATTR = "__decisive_flow_handler__"


class HandlerKind(str, Enum):
    DECISION = "decision"
    ACTION = "action"
    FINAL = "final"


@dataclass(frozen=True, slots=True)
class HandlerBinding:
    """A callable capability bound to one or more node ids.

    Only decision bindings may carry more than one node id (synonyms).
    """

    node_ids: tuple[NodeId, ...]
    kind: HandlerKind
    param_indices: tuple[int, ...]
    handler: Callable[..., Any]

    @property
    def name(self) -> str:
        return getattr(self.handler, "__qualname__", None) or repr(self.handler)


@dataclass(frozen=True, slots=True)
class _HandlerSpec:
    kind: HandlerKind
    node_ids: tuple[NodeId, ...]
    param_indices: tuple[int, ...]


def _normalise_node_ids(node_ids: NodeId | Iterable[NodeId]) -> tuple[NodeId, ...]:
    ids = (node_ids,) if isinstance(node_ids, str) else tuple(node_ids)
    if not ids:
        raise BindingError("A handler must be bound to at least one node ID.")
    for node_id in ids:
        if not isinstance(node_id, str) or not node_id.strip():
            raise BindingError(f"Invalid node ID for handler binding: {node_id!r}")
    if len(set(ids)) != len(ids):
        raise BindingError(f"Node IDs bound to one handler must be unique: {list(ids)}")
    return ids


def _normalise_params(params: Iterable[int]) -> tuple[int, ...]:
    indices = tuple(params)
    for index in indices:
        # bool is an int subclass; reject it explicitly.
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise BindingError(f"Parameter index must be a non-negative int, got {index!r}")
    return indices


class HandlerRegistry:
    """Maps node ids to handler bindings."""

    def __init__(self) -> None:
        self._bindings: list[HandlerBinding] = []
        self._by_node: dict[NodeId, HandlerBinding] = {}

    def register_decision(
        self,
        node_ids: NodeId | Iterable[NodeId],
        handler: Callable[..., bool],
        *,
        params: Iterable[int] = (),
    ) -> HandlerBinding:
        return self._register(
            HandlerBinding(
                node_ids=_normalise_node_ids(node_ids),
                kind=HandlerKind.DECISION,
                param_indices=_normalise_params(params),
                handler=handler,
            )
        )

    def register_action(
        self,
        node_id: NodeId,
        handler: Callable[..., None],
        *,
        params: Iterable[int] = (),
    ) -> HandlerBinding:
        return self._register(
            HandlerBinding(
                node_ids=_normalise_node_ids(node_id),
                kind=HandlerKind.ACTION,
                param_indices=_normalise_params(params),
                handler=handler,
            )
        )

    def register_final(self, node_id: NodeId, handler: Callable[[], Any]) -> HandlerBinding:
        return self._register(
            HandlerBinding(
                node_ids=_normalise_node_ids(node_id),
                kind=HandlerKind.FINAL,
                param_indices=(),
                handler=handler,
            )
        )

    def _register(self, binding: HandlerBinding) -> HandlerBinding:
        if binding.kind is not HandlerKind.DECISION and len(binding.node_ids) != 1:
            raise BindingError(
                f"{binding.kind.value} handler '{binding.name}' "
                "must be bound to exactly one node ID."
            )
        for node_id in binding.node_ids:
            existing = self._by_node.get(node_id)
            if existing is not None:
                raise BindingError(
                    f"Node ID '{node_id}' is already bound to handler '{existing.name}'; "
                    f"cannot also bind '{binding.name}'.",
                    node_id=node_id,
                )
        self._bindings.append(binding)
        for node_id in binding.node_ids:
            self._by_node[node_id] = binding
        logger.debug(
            "Registered handler",
            extra={
                "handler": binding.name,
                "kind": binding.kind.value,
                "node_ids": list(binding.node_ids),
                "param_indices": list(binding.param_indices),
            },
        )
        return binding

    def lookup(self, node_id: NodeId) -> HandlerBinding | None:
        return self._by_node.get(node_id)

    def bindings_of(self, kind: HandlerKind) -> tuple[HandlerBinding, ...]:
        return tuple(b for b in self._bindings if b.kind is kind)

    def __iter__(self) -> Iterator[HandlerBinding]:
        return iter(tuple(self._bindings))

    def __len__(self) -> int:
        return len(self._bindings)

    @classmethod
    def from_host(cls, host: object) -> HandlerRegistry:
        """Collect every method of `host` marked with a node decorator.

        Methods are visited in name order so that duplicate-binding errors are
        reported deterministically.
        """

        registry = cls()
        for name in sorted(dir(type(host))):
            raw = inspect.getattr_static(host, name)
            spec = getattr(getattr(raw, "__func__", raw), _SPEC_ATTR, None)
            if not isinstance(spec, _HandlerSpec):
                continue
            handler = getattr(host, name)
            if spec.kind is HandlerKind.DECISION:
                registry.register_decision(spec.node_ids, handler, params=spec.param_indices)
            elif spec.kind is HandlerKind.ACTION:
                registry.register_action(spec.node_ids[0], handler, params=spec.param_indices)
            else:
                registry.register_final(spec.node_ids[0], handler)
        return registry


def _marker(
    kind: HandlerKind, node_ids: tuple[NodeId, ...], params: Iterable[int]
) -> Callable[[F], F]:
    spec = _HandlerSpec(
        kind=kind,
        node_ids=_normalise_node_ids(node_ids),
        param_indices=_normalise_params(params),
    )

    def decorate(func: F) -> F:
        if hasattr(func, _SPEC_ATTR):
            raise BindingError(
                f"Handler '{func.__qualname__}' is already marked as a node handler."
            )
        setattr(func, _SPEC_ATTR, spec)
        return func

    return decorate


def decision_node(*node_ids: NodeId, params: Iterable[int] = ()) -> Callable[[F], F]:
    """Mark a host method as the decision handler for one or more node ids."""

    return _marker(HandlerKind.DECISION, node_ids, params)


def action_node(node_id: NodeId, *, params: Iterable[int] = ()) -> Callable[[F], F]:
    """Mark a host method as the action handler for `node_id`."""

    return _marker(HandlerKind.ACTION, (node_id,), params)


def final_node(node_id: NodeId) -> Callable[[F], F]:
    """Mark a host method as the final handler for terminal `node_id`."""

    return _marker(HandlerKind.FINAL, (node_id,), ())
