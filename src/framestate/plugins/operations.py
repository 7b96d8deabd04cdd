"""Pure functions for gateway operations.

Canonical default implementations of persist/remove, plus helpers for writing
plugin decorators.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from framestate.plugins.models import CallNext, Decorator

if TYPE_CHECKING:
    from framestate.state.object_state import ObjectState


async def maybe_await(value: Any) -> Any:
    """Await value if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


async def default_persist(state: ObjectState) -> ObjectState:
    """Save through the owning collection, if one is attached.

    Returns:
        Result of ``state.update_in_collection()``, or state itself when the
        state has no collection.
    """
    update = getattr(state, "update_in_collection", None)
    if update is not None:
        return await maybe_await(update())
    return state


async def default_remove(state: ObjectState, force: bool = False) -> bool:
    """Delete through the owning collection, if one is attached.

    Returns:
        Result of ``state.delete_from_collection(force)``, or False when the
        state has no collection.
    """
    delete = getattr(state, "delete_from_collection", None)
    if delete is not None:
        return await maybe_await(delete(force))
    return False


def around(
    enter: Callable[..., Any] | None = None,
    leave: Callable[..., Any] | None = None,
) -> Decorator:
    """Build a decorator from enter/leave hooks.

    Args:
        enter: Called as enter(entity, *args) before the next layer.
        leave: Called as leave(entity, result, *args) after the next layer.
            A non-None return value replaces the result.

    Returns:
        Decorator usable in Plugin.functions. Hooks may be sync or async.

    Example:
        plugin = Plugin(
            name="stamp",
            functions={Operation.PERSIST: around(leave=lambda state, result: stamp(result))},
        )
    """

    async def decorator(call_next: CallNext, entity: Any, *args: Any) -> Any:
        if enter is not None:
            await maybe_await(enter(entity, *args))
        result = await call_next(*args)
        if leave is not None:
            replaced = await maybe_await(leave(entity, result, *args))
            if replaced is not None:
                result = replaced
        return result

    return decorator
