from __future__ import annotations

from typing import List

from .evolve import EvolutionResult, GenerationReport
from .values import format_program

RULE = "-" * 55


def format_report(rep: GenerationReport, verbose: bool = False) -> str:
    lines: List[str] = [
        "",
        RULE,
        f"{'Report for Generation ' + str(rep.generation):^55}",
        RULE,
        f"Best program: {format_program(rep.best.program)}",
        f"Best program size: {rep.best_size}",
        f"Best total error: {rep.best_total_error}",
        "Best errors: (" + " ".join(str(e) for e in rep.best_errors) + ")",
    ]
    if verbose:
        lines.append(f"Mean total error: {rep.mean_total_error}")
        lines.append(f"Average program size: {rep.mean_program_size:.2f}")
    return "\n".join(lines)


def format_summary(result: EvolutionResult) -> str:
    return (
        f"FINAL status={result.status.value.upper()} generation={result.generation} "
        f"best={result.best.total_error} size={len(result.best.program)}"
    )
