import random
import unittest

from push_gp.errors import ErrCode, Failed, Halted
from push_gp.generate import make_random_program
from push_gp.interp import run_from_state, run_program, step
from push_gp.state import make_state
from push_gp.values import Block, Int, Sym, Text, parse_program


class TestInterp(unittest.TestCase):
    def test_example_program(self):
        prog = parse_program('(3 5 integer_* "hello" 4 "world" integer_-)')
        state, out = run_program(prog, fuel=100)
        self.assertIsInstance(out, Halted)
        self.assertEqual(out.steps, 7)
        self.assertEqual(state.exec, ())
        self.assertEqual(state.integer, (Int(11),))
        self.assertEqual(state.string, (Text("world"), Text("hello")))

    def test_example_program_with_input(self):
        prog = parse_program('(3 5 integer_* "hello" in1 "world" integer_-)')
        state, out = run_program(prog, inputs=[Int(4)], fuel=100)
        self.assertIsInstance(out, Halted)
        self.assertEqual(state.integer, (Int(11),))

    def test_literals_move_to_typed_stacks(self):
        s = step(make_state(exec=[Int(3), Text("a")]))
        self.assertEqual(s.integer, (Int(3),))
        s = step(s)
        self.assertEqual(s.string, (Text("a"),))
        self.assertEqual(s.exec, ())

    def test_block_is_spliced_in_order(self):
        blk = Block((Int(1), Int(2), Sym("integer_-")))
        s = step(make_state(exec=[blk, Int(9)], integer=[Int(5)]))
        self.assertEqual(s.exec, (Int(1), Int(2), Sym("integer_-"), Int(9)))
        self.assertEqual(s.integer, (Int(5),))

    def test_nested_blocks(self):
        prog = parse_program("(2 (3 (4 integer_+) integer_*))")
        state, out = run_program(prog, fuel=100)
        self.assertIsInstance(out, Halted)
        self.assertEqual(state.integer, (Int(14),))

    def test_deep_nesting_does_not_recurse(self):
        v = Int(1)
        for _ in range(5000):
            v = Block((v,))
        state, out = run_program((v,), fuel=20_000)
        self.assertIsInstance(out, Halted)
        self.assertEqual(state.integer, (Int(1),))

    def test_insufficient_operands_still_advance(self):
        state, out = run_program(parse_program("(integer_+ 2 integer_*)"), fuel=100)
        self.assertIsInstance(out, Halted)
        self.assertEqual(state.integer, (Int(2),))
        self.assertEqual(state.exec, ())

    def test_unknown_symbol_is_dropped(self):
        state, out = run_program(parse_program("(1 no_such_op 2)"), fuel=100)
        self.assertIsInstance(out, Halted)
        self.assertEqual(state.integer, (Int(2), Int(1)))

    def test_self_splicing_input_times_out(self):
        loop = Block((Sym("in1"),))
        state, out = run_program((Sym("in1"),), inputs=[loop], fuel=250)
        self.assertIsInstance(out, Failed)
        self.assertEqual(out.err.code, ErrCode.TIMEOUT)
        self.assertEqual(out.steps, 250)
        self.assertTrue(state.exec)

    def test_zero_fuel(self):
        _, out = run_program((Int(1),), fuel=0)
        self.assertIsInstance(out, Failed)
        _, out = run_program((), fuel=0)
        self.assertIsInstance(out, Halted)

    def test_run_from_state_uses_existing_exec(self):
        s = make_state(exec=[Sym("integer_+")], integer=[Int(1), Int(2)])
        state, out = run_from_state(s, fuel=10)
        self.assertIsInstance(out, Halted)
        self.assertEqual(state.integer, (Int(3),))

    def test_random_programs_terminate(self):
        palette = parse_program('(in1 integer_+ integer_- integer_* integer_% 0 1 "s")')
        rng = random.Random(7)
        for _ in range(300):
            prog = make_random_program(palette, 40, rng)
            state, out = run_program(prog, inputs=[Int(rng.randint(-50, 50))], fuel=1_000)
            self.assertIsInstance(out, Halted)
            self.assertLessEqual(out.steps, 2 * len(prog))
            self.assertEqual(state.exec, ())


if __name__ == "__main__":
    unittest.main()
