"""Formatting of graphics driver debug messages."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TextIO


class DebugSource(IntEnum):
    API = 0x8246
    WINDOW_SYSTEM = 0x8247
    SHADER_COMPILER = 0x8248
    THIRD_PARTY = 0x8249
    APPLICATION = 0x824A
    OTHER = 0x824B


class DebugType(IntEnum):
    ERROR = 0x824C
    DEPRECATED_BEHAVIOR = 0x824D
    UNDEFINED_BEHAVIOR = 0x824E
    PORTABILITY = 0x824F
    PERFORMANCE = 0x8250
    OTHER = 0x8251
    MARKER = 0x8268
    PUSH_GROUP = 0x8269
    POP_GROUP = 0x826A


class DebugSeverity(IntEnum):
    HIGH = 0x9146
    MEDIUM = 0x9147
    LOW = 0x9148
    NOTIFICATION = 0x826B


_SOURCE_LABELS = {
    DebugSource.API: "API",
    DebugSource.WINDOW_SYSTEM: "Window System",
    DebugSource.SHADER_COMPILER: "Shader Compiler",
    DebugSource.THIRD_PARTY: "Third Party",
    DebugSource.APPLICATION: "Application",
    DebugSource.OTHER: "Other",
}

_TYPE_LABELS = {
    DebugType.ERROR: "Error",
    DebugType.DEPRECATED_BEHAVIOR: "Deprecated Behavior",
    DebugType.UNDEFINED_BEHAVIOR: "Undefined Behavior",
    DebugType.PORTABILITY: "Portability",
    DebugType.PERFORMANCE: "Performance",
    DebugType.MARKER: "Marker",
    DebugType.PUSH_GROUP: "Push Group",
    DebugType.POP_GROUP: "Pop Group",
    DebugType.OTHER: "Other",
}

_SEVERITY_LABELS = {
    DebugSeverity.HIGH: "High",
    DebugSeverity.MEDIUM: "Medium",
    DebugSeverity.LOW: "Low",
    DebugSeverity.NOTIFICATION: "Notification",
}


def _label(enum_cls: type[IntEnum], labels: dict, value: int, default: str) -> str:
    try:
        return labels[enum_cls(value)]
    except ValueError:
        return default


def format_debug_message(source: int, type_: int, id_: int, severity: int, message: str) -> str:
    """Render a debug message as a multi-line report."""
    return (
        "OpenGL Debug Message:\n"
        f"Source: {_label(DebugSource, _SOURCE_LABELS, source, 'Unknown')}\n"
        f"Type: {_label(DebugType, _TYPE_LABELS, type_, 'Unknown')}\n"
        f"ID: {id_}\n"
        f"Severity: {_label(DebugSeverity, _SEVERITY_LABELS, severity, '')}\n"
        f"Message: {message}\n\n"
    )


def report_debug_message(
    source: int,
    type_: int,
    id_: int,
    severity: int,
    message: str,
    stream: TextIO | None = None,
) -> bool:
    """Write high-severity messages to ``stream``; return whether one was written."""
    if severity != DebugSeverity.HIGH:
        return False
    out = sys.stderr if stream is None else stream
    out.write(format_debug_message(source, type_, id_, severity, message))
    return True