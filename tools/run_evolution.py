#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from typing import List

from loguru import logger

from push_gp.evolve import DEFAULT_INSTRUCTIONS, DriverState, EvolutionConfig, GenerationReport, evolve_population
from push_gp.fitness import PENALTY
from push_gp.interp import DEFAULT_FUEL
from push_gp.problems import EASY_INPUTS, INPUTS, regression_evaluator
from push_gp.report import format_report, format_summary
from push_gp.values import format_program, parse_program


def _parse_palette(raw: str):
    if not raw:
        return DEFAULT_INSTRUCTIONS
    try:
        return parse_program(f"({raw})")
    except ValueError as exc:
        raise SystemExit(f"invalid --instructions: {exc}")


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Evolve Push programs for f(x) = x^3 + x + 3 and print a report per generation.")
    p.add_argument("--population-size", type=int, default=200)
    p.add_argument("--generations", type=int, default=100)
    p.add_argument("--max-initial-program-size", type=int, default=50)
    p.add_argument("--tournament-size", type=int, default=20)
    p.add_argument(
        "--instructions",
        default="",
        help="Space-separated palette, e.g. 'in1 integer_+ integer_* 0 1'. Defaults to the built-in set.",
    )
    p.add_argument("--cases", choices=["easy", "full"], default="full")
    p.add_argument("--fuel", type=int, default=DEFAULT_FUEL)
    p.add_argument("--penalty", type=int, default=PENALTY)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--workers", type=int, default=1)
    p.add_argument("--executor", choices=["thread", "process"], default="process")
    p.add_argument("--report", choices=["brief", "full", "verbose"], default="full")
    p.add_argument("--log-level", default="WARNING")
    return p


def main(argv: List[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    cfg = EvolutionConfig(
        population_size=args.population_size,
        max_generations=args.generations,
        instructions=tuple(_parse_palette(args.instructions)),
        max_initial_program_size=args.max_initial_program_size,
        tournament_size=args.tournament_size,
        seed=args.seed,
        workers=args.workers,
        executor=args.executor,
    )
    evaluator = regression_evaluator(
        inputs=EASY_INPUTS if args.cases == "easy" else INPUTS,
        fuel=args.fuel,
        penalty=args.penalty,
    )

    def reporter(rep: GenerationReport) -> None:
        if args.report == "brief":
            print(f"GEN {rep.generation:03d} best={rep.best_total_error} size={rep.best_size}")
        else:
            print(format_report(rep, verbose=args.report == "verbose"))

    try:
        result = evolve_population(evaluator, cfg, reporter=reporter)
    except ValueError as exc:
        raise SystemExit(f"invalid configuration: {exc}")

    print()
    print(format_summary(result))
    if result.status == DriverState.SUCCESS:
        print(f"Solution: {format_program(result.best.program)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
