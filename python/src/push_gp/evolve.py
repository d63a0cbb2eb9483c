from __future__ import annotations

import random
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

from .fitness import Errors, FitnessEvaluator
from .generate import make_random_program
from .instructions import validate_palette
from .values import Int, Program, Sym, Value
from .variation import ADDITION_RATE, DELETION_RATE, crossover, uniform_addition, uniform_deletion


DEFAULT_INSTRUCTIONS: Tuple[Value, ...] = (
    Sym("in1"),
    Sym("integer_+"),
    Sym("integer_-"),
    Sym("integer_*"),
    Sym("integer_%"),
    Int(0),
    Int(1),
)


class DriverState(str, Enum):
    INITIALIZING = "initializing"
    EVALUATING = "evaluating"
    CHECKING_TERMINATION = "checking_termination"
    REPRODUCING = "reproducing"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Individual:
    program: Program
    errors: Errors
    total_error: int

    @classmethod
    def unevaluated(cls, program: Sequence[Value]) -> "Individual":
        """Fresh individual. The case count is unknown until evaluation, so ``errors`` starts empty."""
        return cls(program=tuple(program), errors=(), total_error=0)

    @classmethod
    def scored(cls, program: Sequence[Value], errors: Sequence[int]) -> "Individual":
        errs = tuple(errors)
        return cls(program=tuple(program), errors=errs, total_error=sum(errs))


Population = Tuple[Individual, ...]


@dataclass(frozen=True)
class EvolutionConfig:
    population_size: int = 200
    max_generations: int = 100
    instructions: Tuple[Value, ...] = DEFAULT_INSTRUCTIONS
    max_initial_program_size: int = 50
    tournament_size: int = 20
    addition_rate: float = ADDITION_RATE
    deletion_rate: float = DELETION_RATE
    seed: int = 0
    workers: int = 1
    executor: str = "thread"


@dataclass(frozen=True)
class GenerationReport:
    generation: int
    best: Individual
    best_size: int
    best_total_error: int
    best_errors: Errors
    mean_total_error: int
    mean_program_size: float


@dataclass(frozen=True)
class EvolutionResult:
    status: DriverState
    generation: int
    best: Individual
    history: List[GenerationReport] = field(default_factory=list)
    final_population: Population = ()


Reporter = Callable[[GenerationReport], None]


def tournament_select(population: Sequence[Individual], k: int, rng: random.Random) -> Individual:
    if not population:
        raise ValueError("population is empty")
    if k < 1:
        raise ValueError("tournament size must be >= 1")
    pool = [rng.choice(population) for _ in range(k)]
    # min() keeps the first of several equally fit entrants.
    return min(pool, key=lambda ind: ind.total_error)


def select_and_vary(
    population: Sequence[Individual],
    k: int,
    palette: Sequence[Value],
    rng: random.Random,
    addition_rate: float = ADDITION_RATE,
    deletion_rate: float = DELETION_RATE,
) -> Program:
    r = rng.random()
    if r < 0.5:
        a = tournament_select(population, k, rng)
        b = tournament_select(population, k, rng)
        return crossover(a.program, b.program, rng)
    parent = tournament_select(population, k, rng)
    if r < 0.75:
        return uniform_addition(parent.program, palette, rng, rate=addition_rate)
    return uniform_deletion(parent.program, rng, rate=deletion_rate)


def best_individual(population: Sequence[Individual]) -> Individual:
    if not population:
        raise ValueError("population is empty")
    return min(population, key=lambda ind: ind.total_error)


def _make_executor(cfg: EvolutionConfig) -> Optional[Executor]:
    if cfg.workers <= 1:
        return None
    if cfg.executor == "process":
        pool: Executor = ProcessPoolExecutor(max_workers=cfg.workers)
    else:
        pool = ThreadPoolExecutor(max_workers=cfg.workers, thread_name_prefix="push-gp-eval")
    logger.debug(f"[evolve] Created {cfg.executor} pool with {cfg.workers} workers")
    return pool


def evaluate_population(
    programs: Sequence[Sequence[Value]],
    evaluator: FitnessEvaluator,
    executor: Optional[Executor] = None,
) -> Population:
    if executor is None:
        results = [evaluator(p) for p in programs]
    else:
        results = list(executor.map(evaluator, programs))
    return tuple(Individual(program=tuple(p), errors=errs, total_error=total) for p, (errs, total) in zip(programs, results))


def _report(generation: int, population: Population) -> GenerationReport:
    best = best_individual(population)
    n = len(population)
    return GenerationReport(
        generation=generation,
        best=best,
        best_size=len(best.program),
        best_total_error=best.total_error,
        best_errors=best.errors,
        mean_total_error=sum(ind.total_error for ind in population) // n,
        mean_program_size=sum(len(ind.program) for ind in population) / n,
    )


def _validate_config(cfg: EvolutionConfig) -> None:
    if cfg.population_size <= 0:
        raise ValueError("population_size must be > 0")
    if cfg.max_generations < 0:
        raise ValueError("max_generations must be >= 0")
    if cfg.max_initial_program_size < 1:
        raise ValueError("max_initial_program_size must be >= 1")
    if cfg.tournament_size < 1:
        raise ValueError("tournament_size must be >= 1")
    if cfg.executor not in ("thread", "process"):
        raise ValueError(f"unknown executor: {cfg.executor}")
    validate_palette(cfg.instructions)


def evolve_population(
    evaluator: FitnessEvaluator,
    cfg: EvolutionConfig,
    reporter: Optional[Reporter] = None,
    initial_population: Optional[Sequence[Sequence[Value]]] = None,
) -> EvolutionResult:
    _validate_config(cfg)
    if initial_population is not None and len(initial_population) != cfg.population_size:
        raise ValueError("initial_population size must match population_size")

    rng = random.Random(cfg.seed)
    history: List[GenerationReport] = []
    generation = 0
    programs: List[Program] = []
    population: Population = ()
    state = DriverState.INITIALIZING
    executor = _make_executor(cfg)

    try:
        while True:
            if state == DriverState.INITIALIZING:
                if initial_population is not None:
                    programs = [tuple(p) for p in initial_population]
                else:
                    programs = [
                        make_random_program(cfg.instructions, cfg.max_initial_program_size, rng)
                        for _ in range(cfg.population_size)
                    ]
                population = tuple(Individual.unevaluated(p) for p in programs)
                state = DriverState.EVALUATING

            elif state == DriverState.EVALUATING:
                population = evaluate_population(programs, evaluator, executor)
                rep = _report(generation, population)
                history.append(rep)
                logger.debug(
                    f"[evolve] gen={generation} best={rep.best_total_error} "
                    f"mean={rep.mean_total_error} size={rep.mean_program_size:.2f}"
                )
                if reporter is not None:
                    reporter(rep)
                state = DriverState.CHECKING_TERMINATION

            elif state == DriverState.CHECKING_TERMINATION:
                if any(ind.total_error == 0 for ind in population):
                    state = DriverState.SUCCESS
                elif generation >= cfg.max_generations:
                    state = DriverState.EXHAUSTED
                else:
                    state = DriverState.REPRODUCING

            elif state == DriverState.REPRODUCING:
                programs = [
                    select_and_vary(
                        population,
                        cfg.tournament_size,
                        cfg.instructions,
                        rng,
                        addition_rate=cfg.addition_rate,
                        deletion_rate=cfg.deletion_rate,
                    )
                    for _ in range(cfg.population_size)
                ]
                generation += 1
                state = DriverState.EVALUATING

            else:
                break
    finally:
        if executor is not None:
            executor.shutdown(wait=True)

    best = best_individual(population)
    logger.info(f"[evolve] {state.value} at generation {generation}, best total error {best.total_error}")
    return EvolutionResult(
        status=state,
        generation=generation,
        best=best,
        history=history,
        final_population=population,
    )
