"""framestate: per-frame annotation object state with change tracking.

Usage:
    from framestate import ObjectState, Operation, Plugin, get_registry

    state = ObjectState({"frame": 0, "type": "shape", "shape": "polygon"})
    state.points = [0, 0, 5, 0, 5, 5]
    assert state.dirty("points")

    async def audit(call_next, state, *args):
        print("saving", state)
        return await call_next(*args)

    get_registry().register(Plugin(name="audit", functions={Operation.PERSIST: audit}))
    await state.persist()
"""

__version__ = "0.1.0"

# Core primitives
from framestate.core import (
    STRICT_VALIDATORS,
    ArgumentError,
    FrameStateError,
    ObjectShape,
    ObjectSnapshot,
    ObjectType,
    PluginError,
)

# Plugins
from framestate.plugins import (
    DispatchGateway,
    Operation,
    OperationKey,
    Plugin,
    PluginRegistry,
    around,
    get_registry,
)

# State
from framestate.state import ObjectState, UpdateFlags

__all__ = [
    # Version
    "__version__",
    # Core
    "ObjectType",
    "ObjectShape",
    "ObjectSnapshot",
    "STRICT_VALIDATORS",
    # Errors
    "FrameStateError",
    "ArgumentError",
    "PluginError",
    # State
    "ObjectState",
    "UpdateFlags",
    # Plugins
    "Operation",
    "OperationKey",
    "Plugin",
    "PluginRegistry",
    "DispatchGateway",
    "around",
    "get_registry",
]
