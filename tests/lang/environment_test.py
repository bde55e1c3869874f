import unittest

from pylox.lang.environment import Environment
from pylox.lang.error import LoxRuntimeError


class EnvironmentTestCase(unittest.TestCase):

    def setUp(self):
        self.globals = Environment()
        self.globals.define("a", 1.0)
        self.globals.define("b", "outer")

        self.block = Environment(self.globals)
        self.block.define("b", "inner")

    def test_define_and_get(self):
        cases = {"a": 1.0, "b": "inner"}
        for case, expected in cases.items():
            self.assertEqual(expected, self.block.get(case), case)

        self.assertEqual("outer", self.globals.get("b"))

        self.globals.define("a", None)  # redefinition overwrites in place
        self.assertIsNone(self.block.get("a"))

    def test_shadowing(self):
        self.block.define("a", 2.0)
        self.assertEqual(2.0, self.block.get("a"))
        self.assertEqual(1.0, self.globals.get("a"))

    def test_assign(self):
        self.block.assign("a", 3.0)
        self.assertEqual(3.0, self.globals.get("a"))
        self.assertNotIn("a", self.block.values)

        self.block.assign("b", "changed")
        self.assertEqual("changed", self.block.get("b"))
        self.assertEqual("outer", self.globals.get("b"))

    def test_deep_chain(self):
        scope = self.globals
        for __ in range(10):
            scope = Environment(scope)

        scope.assign("a", 4.0)
        self.assertEqual(4.0, self.globals.get("a"))
        self.assertIs(self.globals, scope.resolve("a"))

    def test_undefined(self):
        should_raise = [
            lambda: self.block.get("c", 7),
            lambda: self.block.assign("c", 1.0, 7),
            lambda: self.globals.get("c"),
        ]
        for case in should_raise:
            with self.assertRaises(LoxRuntimeError) as context:
                case()
            self.assertEqual("Undefined variable 'c'.", context.exception.message)

        with self.assertRaises(LoxRuntimeError) as context:
            self.block.get("c", 7)
        self.assertEqual(7, context.exception.line)

        self.assertNotIn("c", self.block)
        self.assertNotIn("c", self.globals.values)

    def test_contains(self):
        self.assertIn("a", self.block)
        self.assertIn("b", self.globals)
        self.assertNotIn("z", self.block)

    def test_repr(self):
        self.assertEqual("[b] < [a, b]", repr(self.block))
        self.assertEqual("[]", repr(Environment()))


if __name__ == '__main__':
    unittest.main()
