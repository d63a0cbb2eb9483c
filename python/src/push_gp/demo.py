from __future__ import annotations

from push_gp.interp import run_program
from push_gp.errors import Halted
from push_gp.state import make_state
from push_gp.values import Int, Text, format_program, format_value, parse_program


def main():
    # (3 5 integer_* "hello" 4 "world" integer_-)
    #   3*5 = 15, then 15 - 4 = 11; strings stay top-first: "world" "hello"
    prog = parse_program('(3 5 integer_* "hello" 4 "world" integer_-)')
    state, out = run_program(prog, fuel=1_000)
    print("Program:", format_program(prog))
    if isinstance(out, Halted):
        print(f"Halted after {out.steps} steps")
    else:
        print("Error:", out.err.code.value, out.err.message)
    print("integer:", " ".join(format_value(v) for v in state.integer))
    print("string:", " ".join(format_value(v) for v in state.string))

    # Same program reading its middle operand from in1.
    prog_in = parse_program('(3 5 integer_* "hello" in1 "world" integer_-)')
    start = make_state(integer=[Int(1)], string=[Text("abc")], inputs=[("in1", Int(4))])
    state, _ = run_program(prog_in, state=start, fuel=1_000)
    print("with in1=4 over integer (1):", " ".join(format_value(v) for v in state.integer))


if __name__ == "__main__":
    main()
