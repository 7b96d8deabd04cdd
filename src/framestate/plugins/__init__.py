"""Pluggable dispatch gateway for ObjectState operations."""

from framestate.plugins.models import CallNext, Decorator, Operation, OperationKey, Plugin
from framestate.plugins.operations import around, default_persist, default_remove, maybe_await
from framestate.plugins.protocol import (
    CollectionHooks,
    DispatchGateway,
    PersistStrategy,
    RemoveStrategy,
)
from framestate.plugins.registry import PluginRegistry, get_registry

__all__ = [
    # Models
    "Operation",
    "OperationKey",
    "Plugin",
    "Decorator",
    "CallNext",
    # Protocols
    "DispatchGateway",
    "PersistStrategy",
    "RemoveStrategy",
    "CollectionHooks",
    # Operations
    "default_persist",
    "default_remove",
    "around",
    "maybe_await",
    # Registry
    "PluginRegistry",
    "get_registry",
]
