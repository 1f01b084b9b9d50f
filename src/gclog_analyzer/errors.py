"""Exceptions raised by parsing and analysis."""

from __future__ import annotations


class GCLogError(Exception):
    """Base class for analyzer errors."""


class LogFormatError(GCLogError, ValueError):
    """The input is not a GC log in any supported format."""


class UnsupportedCollectorError(GCLogError, ValueError):
    """The collector is outside the supported set."""


class ModelStateError(GCLogError, RuntimeError):
    """An operation was invoked in the wrong lifecycle state of a model."""
