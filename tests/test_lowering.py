import unittest
from pathlib import Path
import sys
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from origami.lowering import lower_expression, lower_function, lower_statement
from origami.parser import Parser
import origami.origami_ast as ast

class TestLowering(unittest.TestCase):
    def setUp(self):
        self.parser = Parser()

    def lower(self, body):
        fn = self.parser.parse(f"define f(a, b, n) {{ {body} }}").declarations[0]
        return lower_function(fn).body

    def test_statements(self):
        self.assertEqual(
            self.lower("let x = a; x; return x;"),
            ["x = a", "x", "return x"],
        )

    def test_operators_call_mangled_names(self):
        self.assertEqual(self.lower("return a + b * 2;"), ["return _plus(a, _mul(b, 2))"])
        self.assertEqual(self.lower("return not a =/= b;"), ["return _not(_not_equals(a, b))"])
        self.assertEqual(self.lower("return a or b and n;"), ["return _or(a, _and(b, n))"])

    def test_conditional(self):
        self.assertEqual(
            self.lower("return if n === 0 then 1 else n * f(a, b, n - 1);"),
            ["return (1 if _equals(n, 0) else _mul(n, f(a, b, _minus(n, 1))))"],
        )

    def test_literals(self):
        self.assertEqual(
            self.lower('return g(1, 2.5, "hi\\n", true, false, nothing);'),
            ["return g(1, 2.5, 'hi\\n', True, False, None)"],
        )

    def test_fields_and_calls(self):
        self.assertEqual(self.lower("return Shape.Circle(a).radius;"), ["return Shape.Circle(a).radius"])

    def test_lowered_declaration_keeps_signature(self):
        definition = ast.FunctionDefinition("+", ["x", "y"], [ast.ReturnStatement(ast.Variable("x"))])
        declaration = lower_function(definition)
        self.assertEqual(declaration, ast.FunctionDeclaration("+", ["x", "y"], ["return x"]))

    def test_operator_inside_its_own_definition_calls_the_override(self):
        fn = self.parser.parse("define +(a, b) { return a + b; }").declarations[0]
        self.assertEqual(lower_function(fn).body, ["return _plus(a, b)"])
        fn = self.parser.parse("define +(a, b) { return a - (0 - b); }").declarations[0]
        self.assertEqual(lower_function(fn).body, ["return _minus(a, _minus(0, b))"])

    def test_direct_lowering(self):
        self.assertEqual(lower_statement(ast.ExpressionStatement(ast.Literal("s"))), "'s'")
        self.assertEqual(lower_expression(ast.UnaryOperation("not", ast.Literal(True))), "_not(True)")

if __name__ == '__main__':
    unittest.main()
