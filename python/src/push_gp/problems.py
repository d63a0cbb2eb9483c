from __future__ import annotations

from typing import Sequence, Tuple

from .fitness import PENALTY, FitnessCase, RegressionEvaluator, make_case
from .interp import DEFAULT_FUEL

EASY_INPUTS: Tuple[int, ...] = (-3, -2, -1, 0, 1, 2, 3)
INPUTS: Tuple[int, ...] = (-50, -23, -18, -7, -3, -2, -1, 0, 1, 2, 3, 7, 18, 23, 50)


def target_function(x: int) -> int:
    # f(x) = x^3 + x + 3
    return x * x * x + x + 3


def regression_cases(inputs: Sequence[int] = INPUTS) -> Tuple[FitnessCase, ...]:
    return tuple(make_case(x, target_function(x)) for x in inputs)


def regression_evaluator(
    inputs: Sequence[int] = INPUTS,
    fuel: int = DEFAULT_FUEL,
    penalty: int = PENALTY,
) -> RegressionEvaluator:
    return RegressionEvaluator(cases=regression_cases(inputs), fuel=fuel, penalty=penalty)
