from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional, Sequence

from .errors import Err, ErrCode, Failed, Halted, Out
from .instructions import InstructionSpec, REGISTRY
from .state import StackId, StackState, bind_input, empty_state, load_exec, push
from .values import Value, ValueKind

DEFAULT_FUEL = 10_000


def step(state: StackState, registry: Optional[Dict[str, InstructionSpec]] = None) -> StackState:
    if not state.exec:
        return state

    top = state.exec[0]
    rest = replace(state, exec=state.exec[1:])
    k = top.kind

    if k == ValueKind.INT:
        return push(rest, StackId.INTEGER, top)

    if k == ValueKind.TEXT:
        return push(rest, StackId.STRING, top)

    if k == ValueKind.BLOCK:
        return load_exec(rest, top.items)

    spec = (REGISTRY if registry is None else registry).get(top.name)
    if spec is None:
        # Unknown symbols are dropped like an instruction lacking operands.
        return rest
    return spec.handler(rest)


def run_from_state(
    state: StackState,
    fuel: int = DEFAULT_FUEL,
    registry: Optional[Dict[str, InstructionSpec]] = None,
) -> tuple[StackState, Out]:
    steps = 0
    while state.exec:
        if steps >= fuel:
            return state, Failed(Err(ErrCode.TIMEOUT, "fuel exhausted"), steps)
        state = step(state, registry)
        steps += 1
    return state, Halted(steps)


def run_program(
    program: Sequence[Value],
    state: Optional[StackState] = None,
    inputs: Optional[Sequence[Value]] = None,
    fuel: int = DEFAULT_FUEL,
    registry: Optional[Dict[str, InstructionSpec]] = None,
) -> tuple[StackState, Out]:
    start = empty_state() if state is None else state
    for value in inputs or ():
        start = bind_input(start, value)
    return run_from_state(load_exec(start, program), fuel=fuel, registry=registry)
