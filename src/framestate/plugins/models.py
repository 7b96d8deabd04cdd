"""Plugin models: operations, keys, and plugin descriptors."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from framestate.core.enums import ObjectType


class Operation(Enum):
    """ObjectState operations routed through the dispatch gateway."""

    PERSIST = "persist"
    REMOVE = "remove"


@dataclass(slots=True, frozen=True)
class OperationKey:
    """Which calls a plugin decorator applies to.

    Attributes:
        operation: Operation to intercept.
        entity_kind: Only intercept states of this type. None matches every type.
    """

    operation: Operation
    entity_kind: ObjectType | None = None

    def matches(self, entity_kind: ObjectType | None, operation: Operation) -> bool:
        """Check whether this key applies to a call."""
        if self.operation is not operation:
            return False
        return self.entity_kind is None or self.entity_kind is entity_kind


CallNext = Callable[..., Awaitable[Any]]
"""Signature: (*args) -> awaitable result of the next layer, bound to the same entity."""

Decorator = Callable[..., Awaitable[Any]]
"""Signature: (call_next, entity, *args) -> awaitable result.

A decorator may run code before or after call_next, pass different arguments to
it, or skip it entirely and return its own result.
"""


@dataclass(slots=True)
class Plugin:
    """A named set of decorators for gateway operations.

    Attributes:
        name: Unique plugin name.
        description: Human-readable purpose.
        functions: Decorator per operation. Keys may be an Operation (any entity
            kind), an operation value string, or an OperationKey.

    Example:
        async def audit(call_next, state, *args):
            log.append(state.frame)
            return await call_next(*args)

        plugin = Plugin(
            name="audit",
            description="Record every saved frame",
            functions={Operation.PERSIST: audit},
        )
    """

    name: str
    description: str = ""
    functions: Mapping[Operation | OperationKey | str, Decorator] = field(default_factory=dict)
