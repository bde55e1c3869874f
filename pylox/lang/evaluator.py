"""Tree-walking evaluation of pylox syntax trees.

Runtime values are plain Python objects:

```
Lox       Python
number    float
string    str
boolean   bool
nil       None
```

Type errors and undefined variables raise LoxRuntimeError, which unwinds the statement being executed; whether the
rest of a program still runs is up to the caller (see pylox/interpreter.py).
"""

import math
import sys

from pylox.grammar import nodes
from pylox.grammar.tokens import TokenType
from pylox.lang.environment import Environment
from pylox.lang.error import LoxError, LoxRuntimeError


def is_truthy(value):
    """false and nil are falsy, every other value (including 0 and "") is truthy."""
    return value is not None and value is not False


def is_number(value):
    return isinstance(value, float) and not isinstance(value, bool)


def is_equal(left, right):
    """Equality never fails: values of different types are simply unequal, so true != 1 and nil != false."""
    return type(left) is type(right) and left == right


def stringify(value):
    """Textual form of a value, as written by print. Integral numbers drop the ".0" of their shortest repr, so very
    large ones keep the exponent form instead of printing their exact binary value.
    """
    if value is None:
        return "nil"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif is_number(value):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    return value


def divide(left, right):
    """IEEE-754 division: 1 / 0 is inf, 0 / 0 is nan."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1, right)
    return left / right


class Evaluator:
    """Executes statements against an Environment, writing print output to output (anything with a write method)."""
    ARITHMETIC = {
        TokenType.MINUS: lambda left, right: left - right,
        TokenType.STAR: lambda left, right: left * right,
        TokenType.SLASH: divide,
    }
    COMPARISON = {
        TokenType.GREATER: lambda left, right: left > right,
        TokenType.GREATER_EQUAL: lambda left, right: left >= right,
        TokenType.LESS: lambda left, right: left < right,
        TokenType.LESS_EQUAL: lambda left, right: left <= right,
    }

    def __init__(self, output=None):
        self.output = output if output is not None else sys.stdout

    # statements

    def execute(self, stmt, env):
        if isinstance(stmt, nodes.Expression):
            self.evaluate(stmt.expression, env)

        elif isinstance(stmt, nodes.Print):
            self.output.write(stringify(self.evaluate(stmt.expression, env)) + "\n")

        elif isinstance(stmt, nodes.Var):
            value = None
            if stmt.initializer is not None:
                value = self.evaluate(stmt.initializer, env)
            env.define(stmt.name.lexeme, value)

        elif isinstance(stmt, nodes.Block):
            self.execute_block(stmt.statements, Environment(env))

        elif isinstance(stmt, nodes.If):
            if is_truthy(self.evaluate(stmt.condition, env)):
                self.execute(stmt.then_branch, env)
            elif stmt.else_branch is not None:
                self.execute(stmt.else_branch, env)

        elif isinstance(stmt, nodes.While):
            while is_truthy(self.evaluate(stmt.condition, env)):
                self.execute(stmt.body, env)

        else:
            raise LoxError(f"unknown statement '{type(stmt).__name__}'")

    def execute_block(self, statements, env):
        """Executes statements in env, usually a fresh child scope. The child is dropped by the caller afterwards."""
        for stmt in statements:
            self.execute(stmt, env)

    # expressions

    def evaluate(self, expr, env):
        if isinstance(expr, nodes.Literal):
            return Evaluator.literal(expr.token)

        elif isinstance(expr, nodes.Grouping):
            return self.evaluate(expr.expression, env)

        elif isinstance(expr, nodes.Variable):
            return env.get(expr.name.lexeme, expr.name.line)

        elif isinstance(expr, nodes.Assign):
            value = self.evaluate(expr.value, env)
            env.assign(expr.name.lexeme, value, expr.name.line)
            return value

        elif isinstance(expr, nodes.Unary):
            return self.unary(expr.operator, self.evaluate(expr.right, env))

        elif isinstance(expr, nodes.Binary):
            left = self.evaluate(expr.left, env)
            right = self.evaluate(expr.right, env)
            return self.binary(expr.operator, left, right)

        raise LoxError(f"unknown expression '{type(expr).__name__}'")

    @staticmethod
    def literal(token):
        if token.kind in (TokenType.NUMBER, TokenType.STRING):
            return token.literal
        elif token.kind == TokenType.TRUE:
            return True
        elif token.kind == TokenType.FALSE:
            return False
        elif token.kind == TokenType.NIL:
            return None
        raise LoxError(f"'{token.lexeme}' is not a literal")

    @staticmethod
    def unary(operator, right):
        if operator.kind == TokenType.MINUS:
            Evaluator.check_numbers(operator, right, message="Operand must be a number.")
            return -right
        elif operator.kind == TokenType.BANG:
            return not is_truthy(right)
        raise LoxError(f"'{operator.lexeme}' is not a unary operator")

    @staticmethod
    def binary(operator, left, right):
        kind = operator.kind

        if kind == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            elif isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError.at(operator, "Operands must be two numbers or two strings.")

        elif kind in Evaluator.ARITHMETIC:
            Evaluator.check_numbers(operator, left, right)
            return Evaluator.ARITHMETIC[kind](left, right)

        elif kind in Evaluator.COMPARISON:
            Evaluator.check_numbers(operator, left, right)
            return Evaluator.COMPARISON[kind](left, right)

        elif kind == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        elif kind == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        raise LoxError(f"'{operator.lexeme}' is not a binary operator")

    @staticmethod
    def check_numbers(operator, *operands, message="Operands must be numbers."):
        if not all(is_number(operand) for operand in operands):
            raise LoxRuntimeError.at(operator, message)
