# -*- coding: utf-8 -*-
"""
Land Record Wizard Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "RecordGateway",
    "HttpRecordGateway",
    "CompleteRecord",
    "ValidationFactory",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name in ("RecordGateway", "HttpRecordGateway", "CompleteRecord"):
        from . import record_gateway
        return getattr(record_gateway, name)
    elif name == "ValidationFactory":
        from .validation import ValidationFactory
        return ValidationFactory
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
