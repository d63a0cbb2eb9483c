from .values import *
from .errors import *
from .state import (
    EMPTY,
    StackId,
    StackState,
    bind_input,
    depth,
    empty_state,
    is_empty,
    load_exec,
    lookup_input,
    make_state,
    peek,
    pop,
    push,
)
from .instructions import (
    InstructionSpec,
    REGISTRY,
    apply_instruction,
    build_registry,
    make_input_instruction,
    validate_palette,
)
from .interp import DEFAULT_FUEL, run_from_state, run_program, step
from .generate import make_random_program
from .variation import crossover, uniform_addition, uniform_deletion
from .fitness import PENALTY, FitnessCase, FitnessEvaluator, RegressionEvaluator, make_case
from .evolve import (
    DEFAULT_INSTRUCTIONS,
    DriverState,
    EvolutionConfig,
    EvolutionResult,
    GenerationReport,
    Individual,
    best_individual,
    evaluate_population,
    evolve_population,
    select_and_vary,
    tournament_select,
)
