"""Plugin registry and dispatch gateway.

Usage:
    from framestate.plugins import Operation, Plugin, get_registry

    async def audit(call_next, state, *args):
        result = await call_next(*args)
        audit_log.append(state.frame)
        return result

    get_registry().register(
        Plugin(name="audit", functions={Operation.PERSIST: audit})
    )

    await state.persist()  # runs audit around the default implementation

Chains are resolved on every call, so plugins registered after a state was
created still apply to it. The earliest registered plugin is the outermost
layer.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from framestate.config import StateSettings
from framestate.core.enums import ObjectType
from framestate.core.errors import PluginError
from framestate.plugins.models import CallNext, Decorator, Operation, OperationKey, Plugin
from framestate.plugins.operations import maybe_await

logger = logging.getLogger(__name__)


def _normalize_key(key: Operation | OperationKey | str, plugin_name: str) -> OperationKey:
    """Turn any accepted Plugin.functions key into an OperationKey.

    Raises:
        PluginError: If key does not name a known operation.
    """
    if isinstance(key, OperationKey):
        return key
    try:
        return OperationKey(operation=Operation(key))
    except ValueError as e:
        raise PluginError(f"Plugin {plugin_name!r} decorates unknown operation {key!r}") from e


class PluginRegistry:
    """Ordered plugin registry implementing the DispatchGateway protocol.

    Args:
        settings: Error wrapping and logging behavior. Defaults to StateSettings().
    """

    def __init__(self, settings: StateSettings | None = None) -> None:
        """Initialize empty registry."""
        self._settings = settings or StateSettings()
        self._plugins: dict[str, Plugin] = {}
        self._functions: dict[str, list[tuple[OperationKey, Decorator]]] = {}

    def register(self, plugin: Plugin) -> None:
        """Validate and register a plugin.

        Args:
            plugin: Plugin to add. It becomes the innermost layer of its operations.

        Raises:
            PluginError: If the name is blank or taken, a key names an unknown
                operation, or a decorator is not callable.
        """
        if not isinstance(plugin, Plugin):
            raise PluginError(f"Expected Plugin, but got {type(plugin).__name__}")
        if not isinstance(plugin.name, str) or not plugin.name.strip():
            raise PluginError("Plugin name must be a non-empty string")
        if not isinstance(plugin.description, str):
            raise PluginError(f"Plugin {plugin.name!r} description must be a string")
        if plugin.name in self._plugins:
            raise PluginError(f"Plugin {plugin.name!r} is already registered")

        functions: list[tuple[OperationKey, Decorator]] = []
        for key, decorator in plugin.functions.items():
            op_key = _normalize_key(key, plugin.name)
            if not callable(decorator):
                raise PluginError(
                    f"Plugin {plugin.name!r} decorator for {op_key.operation.value} "
                    f"is not callable"
                )
            functions.append((op_key, decorator))

        self._plugins[plugin.name] = plugin
        self._functions[plugin.name] = functions
        logger.info("Registered plugin %r (%d decorators)", plugin.name, len(functions))

    def unregister(self, name: str) -> bool:
        """Remove a plugin. Returns True if it was registered."""
        if name not in self._plugins:
            return False
        del self._plugins[name]
        del self._functions[name]
        logger.info("Unregistered plugin %r", name)
        return True

    def plugins(self) -> list[Plugin]:
        """Registered plugins in registration order."""
        return list(self._plugins.values())

    def clear(self) -> None:
        """Remove every plugin."""
        self._plugins.clear()
        self._functions.clear()

    def decorators_for(
        self, entity_kind: ObjectType | None, operation: Operation
    ) -> list[tuple[str, Decorator]]:
        """Get the decorator chain for a call, outermost first.

        Returns:
            (plugin_name, decorator) pairs in registration order.
        """
        chain: list[tuple[str, Decorator]] = []
        for name, functions in self._functions.items():
            for key, decorator in functions:
                if key.matches(entity_kind, operation):
                    chain.append((name, decorator))
        return chain

    async def invoke(
        self,
        entity: Any,
        operation: Operation,
        default: Callable[..., Awaitable[Any]],
        *args: Any,
    ) -> Any:
        """Run operation on entity through the current plugin chain.

        Args:
            entity: Object the operation is invoked on. Its ``type`` attribute
                selects entity-kind specific decorators.
            operation: Operation being invoked.
            default: Canonical implementation, called as default(entity, *args).
            *args: Operation arguments, forwarded to the first layer.

        Returns:
            Result of the outermost layer.

        Raises:
            PluginError: If a plugin fails (non-PluginError failures are wrapped
                when wrap_plugin_errors is enabled).
            Exception: Anything raised by the default implementation, unchanged.
        """
        operation = Operation(operation)
        entity_kind = getattr(entity, "type", None)
        chain = self.decorators_for(entity_kind, operation)

        if self._settings.log_dispatch:
            logger.debug(
                "Dispatching %s on %r through %d plugin(s)", operation.value, entity, len(chain)
            )

        async def call_default(*call_args: Any) -> Any:
            return await maybe_await(default(entity, *call_args))

        call: CallNext = call_default
        for plugin_name, decorator in reversed(chain):
            call = self._layer(plugin_name, decorator, entity, call)

        return await call(*args)

    def _layer(
        self, plugin_name: str, decorator: Decorator, entity: Any, call_next: CallNext
    ) -> CallNext:
        """Wrap call_next with one plugin decorator.

        Exceptions coming up from call_next pass through unchanged. Exceptions
        raised by the decorator's own code are attributed to the plugin.
        """
        downstream: list[BaseException] = []

        async def tracked_next(*args: Any) -> Any:
            try:
                return await call_next(*args)
            except Exception as e:
                downstream.append(e)
                raise

        async def call(*args: Any) -> Any:
            try:
                return await maybe_await(decorator(tracked_next, entity, *args))
            except PluginError:
                raise
            except Exception as e:
                if any(e is seen for seen in downstream) or not self._settings.wrap_plugin_errors:
                    raise
                logger.warning("Plugin %r failed: %s", plugin_name, e)
                raise PluginError(f"Exception in plugin {plugin_name}: {e}") from e

        return call


# Module-level registry instance
_registry = PluginRegistry()


def get_registry() -> PluginRegistry:
    """Access the global plugin registry.

    Returns:
        The process-local PluginRegistry instance.
    """
    return _registry
