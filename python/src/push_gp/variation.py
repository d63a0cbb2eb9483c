from __future__ import annotations

import random
from typing import List, Sequence

from .generate import random_instruction
from .values import Program, Value

ADDITION_RATE = 0.05
DELETION_RATE = 0.05


def crossover(prog_a: Sequence[Value], prog_b: Sequence[Value], rng: random.Random) -> Program:
    """Uniform crossover.

    Aligned positions pick either parent's instruction with equal odds. The
    unmatched tail of the longer parent is kept instruction by instruction,
    each with probability 0.5.
    """
    child: List[Value] = []
    shared = min(len(prog_a), len(prog_b))
    for i in range(shared):
        child.append(prog_a[i] if rng.random() < 0.5 else prog_b[i])
    tail = prog_a[shared:] if len(prog_a) > shared else prog_b[shared:]
    for ins in tail:
        if rng.random() < 0.5:
            child.append(ins)
    return tuple(child)


def uniform_addition(
    program: Sequence[Value],
    palette: Sequence[Value],
    rng: random.Random,
    rate: float = ADDITION_RATE,
) -> Program:
    child: List[Value] = []
    for ins in program:
        if rng.random() < rate:
            child.append(random_instruction(rng, palette))
        child.append(ins)
    if rng.random() < rate:
        child.append(random_instruction(rng, palette))
    return tuple(child)


def uniform_deletion(program: Sequence[Value], rng: random.Random, rate: float = DELETION_RATE) -> Program:
    return tuple(ins for ins in program if rng.random() >= rate)
