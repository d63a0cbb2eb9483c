from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrCode(str, Enum):
    TIMEOUT = "Timeout"
    NO_OUTPUT = "NoOutput"


@dataclass(frozen=True)
class Err:
    code: ErrCode
    message: str = ""


@dataclass(frozen=True)
class Halted:
    steps: int


@dataclass(frozen=True)
class Failed:
    err: Err
    steps: int = 0


Out = Halted | Failed
