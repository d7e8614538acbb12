"""
Tests for the mlirgen operation builder and build sessions.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from mlirgen.ir import (
    Block, BuildSession, F32, I32, IntegerAttr, OperationBuilder, Region,
    StringAttr, numbered_ids, operation,
)
from mlirgen.source import Position, SourceLocation


class CountingGenerator:
    """Id generator that records how often it is called."""

    def __init__(self):
        self.calls = 0

    def __call__(self, env):
        self.calls += 1
        return env + 1, f"%v{env}"


class TestNumberedIds(unittest.TestCase):

    def test_sequence(self):
        gen = numbered_ids()
        env, first = gen(0)
        env, second = gen(env)
        self.assertEqual((first, second, env), ("%0", "%1", 2))

    def test_prefix(self):
        self.assertEqual(numbered_ids("%arg")(3), (4, "%arg3"))

    def test_pure(self):
        gen = numbered_ids()
        self.assertEqual(gen(5), gen(5))


class TestOperationBuilder(unittest.TestCase):
    """Builder defaults, setters and build."""

    def setUp(self):
        self.gen = numbered_ids()

    def test_defaults(self):
        env, op = operation("test.noop", self.gen).build(0)
        self.assertEqual(env, 1)
        self.assertEqual(op.id, "%0")
        self.assertEqual(op.name, "test.noop")
        self.assertEqual(op.operands, ())
        self.assertEqual(op.results, ())
        self.assertEqual(op.attrs, {})
        self.assertEqual(op.regions, ())
        self.assertFalse(op.is_terminator)
        self.assertTrue(op.location.is_unknown)
        self.assertEqual(op.successors, ())

    def test_setters(self):
        loc = SourceLocation("main.ns", Position(1, 0), Position(1, 10))
        ret = operation("func.return", self.gen).as_terminator().build(10)[1]
        region = Region(Block(ret))
        builder = (
            operation("test.op", self.gen)
            .with_operands(["%a", "%b"])
            .with_results([("%r", I32)])
            .with_attrs({"value": IntegerAttr(1)})
            .with_regions([region])
            .as_terminator()
            .with_loc(loc)
            .with_successors(["bb1"])
        )
        _, op = builder.build(0)
        self.assertEqual(op.operands, ("%a", "%b"))
        self.assertEqual(op.results, (("%r", I32),))
        self.assertEqual(op.attrs, {"value": IntegerAttr(1)})
        self.assertEqual(op.regions, (region,))
        self.assertTrue(op.is_terminator)
        self.assertEqual(op.location, loc)
        self.assertEqual(op.successors, ("bb1",))

    def test_last_call_wins(self):
        _, op = (
            operation("test.op", self.gen)
            .with_operands(["%a"])
            .with_operands(["%b", "%c"])
            .with_attrs({"x": IntegerAttr(1)})
            .with_attrs({"y": IntegerAttr(2)})
            .build(0)
        )
        self.assertEqual(op.operands, ("%b", "%c"))
        self.assertEqual(list(op.attrs), ["y"])

    def test_setter_order_does_not_matter(self):
        a = operation("t.op", self.gen).with_operands(["%x"]).with_results([("%y", F32)])
        b = operation("t.op", self.gen).with_results([("%y", F32)]).with_operands(["%x"])
        self.assertEqual(a.build(0), b.build(0))

    def test_setters_do_not_mutate(self):
        base = operation("t.op", self.gen)
        base.with_operands(["%x"])
        self.assertEqual(base.operands, ())
        self.assertIsInstance(base.with_operands(["%x"]), OperationBuilder)

    def test_builder_attrs_are_read_only(self):
        source = {"value": IntegerAttr(1)}
        builder = operation("t.op", self.gen).with_attrs(source)
        source["extra"] = IntegerAttr(2)
        with self.assertRaises(TypeError):
            builder.attrs["injected"] = IntegerAttr(3)
        with self.assertRaises(TypeError):
            operation("t.op", self.gen).attrs["injected"] = IntegerAttr(3)
        _, op = builder.build(0)
        self.assertEqual(list(op.attrs), ["value"])

    def test_builders_hash_by_identity(self):
        a = operation("t.op", self.gen)
        b = operation("t.op", self.gen)
        self.assertNotEqual(a, b)
        self.assertEqual(len({a, b, a}), 2)

    def test_generator_called_once_per_build(self):
        gen = CountingGenerator()
        builder = operation("t.op", gen).with_operands(["%x"]).with_result_types(I32)
        self.assertEqual(gen.calls, 0)
        env, op = builder.build(7)
        self.assertEqual(gen.calls, 1)
        self.assertEqual((env, op.id), (8, "%v7"))

    def test_result_types_named_after_id(self):
        _, single = operation("t.op", self.gen).with_result_types(I32).build(4)
        self.assertEqual(single.results, (("%4", I32),))

        _, multi = operation("t.op", self.gen).with_result_types(I32, F32).build(4)
        self.assertEqual(multi.results, (("%4_0", I32), ("%4_1", F32)))

    def test_with_results_replaces_result_types(self):
        _, op = (
            operation("t.op", self.gen)
            .with_result_types(I32)
            .with_results([("%named", F32)])
            .build(0)
        )
        self.assertEqual(op.results, (("%named", F32),))

    def test_stale_environment_repeats_ids(self):
        builder = operation("t.op", self.gen)
        _, first = builder.build(0)
        _, second = builder.build(0)
        self.assertEqual(first.id, second.id)


class TestBuildSession(unittest.TestCase):
    """Sessions thread the environment between builds."""

    def test_threads_environment(self):
        session = BuildSession()
        a = session.build(session.op("arith.constant").with_result_types(I32))
        b = session.build(session.op("arith.constant").with_result_types(I32))
        c = session.build(session.op("arith.addi").with_operands([a.id, b.id]).with_result_types(I32))
        self.assertEqual([a.id, b.id, c.id], ["%0", "%1", "%2"])
        self.assertEqual(session.env, 3)
        self.assertEqual(session.built, 3)

    def test_custom_generator_and_env(self):
        session = BuildSession(numbered_ids("%t"), env=10)
        op = session.build(session.op("t.op").with_attrs({"sym_name": StringAttr("f")}))
        self.assertEqual(op.id, "%t10")
        self.assertEqual(session.env, 11)


if __name__ == "__main__":
    unittest.main(verbosity=2)
