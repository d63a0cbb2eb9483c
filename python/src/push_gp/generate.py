from __future__ import annotations

import random
from typing import Sequence

from .values import Program, Value


def random_instruction(rng: random.Random, palette: Sequence[Value]) -> Value:
    return palette[rng.randrange(len(palette))]


def make_random_program(palette: Sequence[Value], max_size: int, rng: random.Random) -> Program:
    if not palette:
        raise ValueError("palette must not be empty")
    if max_size < 1:
        raise ValueError("max_size must be >= 1")
    n = rng.randint(1, max_size)
    return tuple(random_instruction(rng, palette) for _ in range(n))
