# loom/errors.py
# Error types shared by the bracket index, the interpreter and the display adapters.

from __future__ import annotations
from typing import Any, Dict, Optional


class LoomError(Exception):
    """Fatal interpreter error with a machine-readable kind and a position."""

    kind = "error"

    def __init__(self, detail: str, *, kind: Optional[str] = None, position: Optional[int] = None):
        super().__init__(detail)
        if kind is not None:
            self.kind = kind
        self.position = position
        self.detail = detail

    def to_receipt(self) -> Dict[str, Any]:
        return {"kind": self.kind, "position": self.position, "reason": self.detail}


class ParseErrorLoom(LoomError):
    kind = "parse-error"


class RuntimeErrorLoom(LoomError):
    kind = "runtime-error"


class DisplayErrorLoom(LoomError):
    kind = "display-unavailable"


class ProgramNotFoundLoom(LoomError):
    kind = "program-not-found"


class QuitRequested(Exception):
    """Raised by a display sink when the user closes the canvas mid-run."""
