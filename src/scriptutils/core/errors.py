from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_DEFAULT


@dataclass
class ScriptError(Exception):
    message: str
    code: int = ERR_DEFAULT
    kind: str = "generic_error"
    reported: bool = False

    def __str__(self) -> str:
        return self.message
