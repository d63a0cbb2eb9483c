from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .state import (
    EMPTY,
    StackId,
    StackState,
    is_empty,
    lookup_input,
    peek,
    pop,
    push,
)
from .values import Int, Value, ValueKind

Handler = Callable[[StackState], StackState]


@dataclass(frozen=True)
class InstructionSpec:
    name: str
    input_stacks: Tuple[StackId, ...]
    output_stack: StackId
    handler: Handler


def apply_instruction(
    state: StackState,
    fn: Callable[..., Value],
    arg_stacks: Sequence[StackId],
    out_stack: StackId,
) -> StackState:
    """Pop one value per entry of ``arg_stacks`` and push ``fn(*args)``.

    Values are popped in declaration order; ``fn`` receives them deepest
    first, so two pops from one stack call ``fn(second, top)``. If a source
    runs dry the original state is returned untouched.
    """
    cur = state
    popped: List[Value] = []
    for stack in arg_stacks:
        if is_empty(cur, stack):
            return state
        popped.append(peek(cur, stack))
        cur = pop(cur, stack)
    popped.reverse()
    return push(cur, out_stack, fn(*popped))


def _int_add(a: Int, b: Int) -> Int:
    return Int(a.value + b.value)


def _int_sub(a: Int, b: Int) -> Int:
    return Int(a.value - b.value)


def _int_mul(a: Int, b: Int) -> Int:
    return Int(a.value * b.value)


def _int_quot(a: Int, b: Int) -> Int:
    # Protected division: a zero denominator hands back the numerator.
    if b.value == 0:
        return a
    q = abs(a.value) // abs(b.value)
    return Int(q if (a.value < 0) == (b.value < 0) else -q)


def _binary_int(name: str, fn: Callable[[Int, Int], Int]) -> InstructionSpec:
    stacks = (StackId.INTEGER, StackId.INTEGER)

    def handler(state: StackState) -> StackState:
        return apply_instruction(state, fn, stacks, StackId.INTEGER)

    return InstructionSpec(name=name, input_stacks=stacks, output_stack=StackId.INTEGER, handler=handler)


def make_input_instruction(name: str) -> InstructionSpec:
    """Instruction that pushes the value bound to input ``name`` onto exec.

    The bound value lands on exec rather than a typed stack so it is
    re-evaluated as code. Unbound inputs make the instruction a no-op.
    """

    def handler(state: StackState) -> StackState:
        value = lookup_input(state, name)
        if value is EMPTY:
            return state
        return push(state, StackId.EXEC, value)

    return InstructionSpec(name=name, input_stacks=(), output_stack=StackId.EXEC, handler=handler)


def build_registry(specs: Iterable[InstructionSpec]) -> Dict[str, InstructionSpec]:
    out: Dict[str, InstructionSpec] = {}
    for spec in specs:
        if spec.name in out:
            raise ValueError(f"duplicate instruction: {spec.name}")
        out[spec.name] = spec
    return out


REGISTRY: Dict[str, InstructionSpec] = build_registry([
    make_input_instruction("in1"),
    _binary_int("integer_+", _int_add),
    _binary_int("integer_-", _int_sub),
    _binary_int("integer_*", _int_mul),
    _binary_int("integer_%", _int_quot),
])


def validate_palette(palette: Sequence[Value], registry: Optional[Dict[str, InstructionSpec]] = None) -> None:
    if not palette:
        raise ValueError("instruction palette must not be empty")
    reg = REGISTRY if registry is None else registry
    for i, ins in enumerate(palette):
        if ins.kind == ValueKind.SYM and ins.name not in reg:
            raise ValueError(f"palette[{i}]: unknown instruction: {ins.name}")
