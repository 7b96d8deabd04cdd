"""Exceptions raised by framestate."""

from __future__ import annotations


class FrameStateError(Exception):
    """Base class for framestate errors."""

    pass


class ArgumentError(FrameStateError, ValueError):
    """Raised when a caller passes a structurally invalid value.

    Surfaced synchronously at the point of assignment or parsing.
    """

    pass


class PluginError(FrameStateError):
    """Raised when a plugin is invalid or fails during dispatch.

    Surfaced through the awaited result of ``persist()`` / ``remove()``.
    """

    pass
