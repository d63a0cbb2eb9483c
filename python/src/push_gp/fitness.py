from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple

from .errors import Err, ErrCode, Failed
from .instructions import REGISTRY
from .interp import DEFAULT_FUEL, run_program
from .state import EMPTY, StackId, peek
from .values import Int, Value

PENALTY = 1_000_000

Errors = Tuple[int, ...]


@dataclass(frozen=True)
class FitnessCase:
    inputs: Tuple[Value, ...]
    expected: int


class FitnessEvaluator(Protocol):
    def __call__(self, program: Sequence[Value]) -> Tuple[Errors, int]:
        ...


def make_case(x: int, expected: int) -> FitnessCase:
    return FitnessCase(inputs=(Int(x),), expected=expected)


@dataclass(frozen=True)
class RegressionEvaluator:
    """Scores a program by absolute error against integer-valued cases.

    Inputs of each case are bound as in1, in2, ... and the program runs from
    an empty state. A missing integer output costs ``penalty``; running out
    of fuel costs ``timeout_penalty`` (``penalty`` when unset). Both are fixed
    values, so a program that halts with an error above them still ranks
    below one that timed out. Raise ``timeout_penalty`` when targets are large.
    """

    cases: Tuple[FitnessCase, ...]
    fuel: int = DEFAULT_FUEL
    penalty: int = PENALTY
    timeout_penalty: int | None = None

    def run_case(self, program: Sequence[Value], case: FitnessCase) -> int | Err:
        final, out = run_program(program, inputs=case.inputs, fuel=self.fuel, registry=REGISTRY)
        if isinstance(out, Failed):
            return out.err
        top = peek(final, StackId.INTEGER)
        if top is EMPTY:
            return Err(ErrCode.NO_OUTPUT, "integer stack empty at halt")
        return top.value

    def case_error(self, program: Sequence[Value], case: FitnessCase) -> int:
        r = self.run_case(program, case)
        if isinstance(r, Err):
            if r.code == ErrCode.TIMEOUT and self.timeout_penalty is not None:
                return self.timeout_penalty
            return self.penalty
        return abs(case.expected - r)

    def __call__(self, program: Sequence[Value]) -> Tuple[Errors, int]:
        errors = tuple(self.case_error(program, case) for case in self.cases)
        return errors, sum(errors)
