"""Protocols for the dispatch gateway and its collaborators.

ObjectState does not depend on a concrete collection or registry. It depends on:
- a DispatchGateway that resolves the active implementation at call time
- optional CollectionHooks attached by whichever collection owns the state
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from framestate.plugins.models import Operation
    from framestate.state.object_state import ObjectState


@runtime_checkable
class PersistStrategy(Protocol):
    """Saves a state and returns the (possibly updated) state."""

    async def __call__(self, state: ObjectState) -> ObjectState: ...


@runtime_checkable
class RemoveStrategy(Protocol):
    """Removes a state and reports whether it was removed.

    ``force`` asks to remove even a locked object. The strategy decides.
    """

    async def __call__(self, state: ObjectState, force: bool = False) -> bool: ...


@runtime_checkable
class DispatchGateway(Protocol):
    """Routes an operation through zero or more plugin layers to its default.

    Implementations must propagate every failure to the caller.
    """

    async def invoke(
        self,
        entity: Any,
        operation: Operation,
        default: Callable[..., Awaitable[Any]],
        *args: Any,
    ) -> Any:
        """Run the active implementation of operation for entity.

        Args:
            entity: Object the operation is invoked on.
            operation: Which operation is being invoked.
            default: Canonical implementation, called as default(entity, *args).
            *args: Operation arguments.

        Returns:
            Result of the outermost layer.
        """
        ...


@runtime_checkable
class CollectionHooks(Protocol):
    """Capabilities a collection may attach to the states it owns.

    Both may be sync or async. Neither is required.
    """

    def update_in_collection(self) -> Any:
        """Write pending changes to the collection. Returns the updated state."""
        ...

    def delete_from_collection(self, force: bool) -> Any:
        """Remove the state from the collection. Returns whether it was removed."""
        ...
