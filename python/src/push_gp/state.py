from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence, Tuple

from .values import Value


class StackId(str, Enum):
    EXEC = "exec"
    INTEGER = "integer"
    STRING = "string"
    INPUT = "input"


class _Empty:
    _instance = None

    def __new__(cls) -> "_Empty":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"

    def __reduce__(self):
        return (_Empty, ())


EMPTY = _Empty()

Bindings = Tuple[Tuple[str, Value], ...]


@dataclass(frozen=True)
class StackState:
    # Every stack is stored top-first.
    exec: Tuple[Value, ...] = ()
    integer: Tuple[Value, ...] = ()
    string: Tuple[Value, ...] = ()
    inputs: Bindings = ()


def empty_state() -> StackState:
    return StackState()


def make_state(
    exec: Sequence[Value] = (),
    integer: Sequence[Value] = (),
    string: Sequence[Value] = (),
    inputs: Sequence[Tuple[str, Value]] = (),
) -> StackState:
    return StackState(
        exec=tuple(exec),
        integer=tuple(integer),
        string=tuple(string),
        inputs=tuple((str(k), v) for k, v in inputs),
    )


def _stack(state: StackState, stack: StackId) -> Tuple:
    if stack == StackId.INPUT:
        return state.inputs
    return getattr(state, stack.value)


def depth(state: StackState, stack: StackId) -> int:
    return len(_stack(state, stack))


def is_empty(state: StackState, stack: StackId) -> bool:
    return depth(state, stack) == 0


def bind_input(state: StackState, value: Value) -> StackState:
    """Bind ``value`` to the next unused input name (in1, in2, ...)."""
    name = f"in{len(state.inputs) + 1}"
    return replace(state, inputs=state.inputs + ((name, value),))


def lookup_input(state: StackState, name: str):
    for key, value in state.inputs:
        if key == name:
            return value
    return EMPTY


def push(state: StackState, stack: StackId, value: Value) -> StackState:
    if stack == StackId.INPUT:
        return bind_input(state, value)
    return replace(state, **{stack.value: (value,) + _stack(state, stack)})


def pop(state: StackState, stack: StackId) -> StackState:
    items = _stack(state, stack)
    if not items:
        return state
    if stack == StackId.INPUT:
        return replace(state, inputs=items[:-1])
    return replace(state, **{stack.value: items[1:]})


def peek(state: StackState, stack: StackId):
    items = _stack(state, stack)
    if not items:
        return EMPTY
    if stack == StackId.INPUT:
        return items[-1][1]
    return items[0]


def load_exec(state: StackState, program: Sequence[Value]) -> StackState:
    # The first element of ``program`` becomes the new top of exec.
    return replace(state, exec=tuple(program) + state.exec)
