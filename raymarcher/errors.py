"""Error type shared by the whole package."""

from __future__ import annotations

import sys


class RayMarcherError(RuntimeError):
    """Raised when the renderer meets a condition it cannot recover from."""


def fail(message: str) -> None:
    """Report ``message`` on standard output and raise it as an error."""
    print(f"[ERROR] {message}", file=sys.stdout, flush=True)
    raise RayMarcherError(message)