"""Lox interpreter.

Basic program flow:
    1. Scanner: converts source text into tokens, see pylox/lang/scanner.py
        - For the lexical grammar, see pylox/grammar/tokens.py
    2. Parser: produces a list of statement trees by recursive descent, see pylox/lang/parser.py
        - For the syntax tree and its grammar, see pylox/grammar/nodes.py
    3. Evaluation: not a compiler, so statements are executed on the fly by walking their trees against a chain of
       Environments, see pylox/lang/evaluator.py

Each stage reports its problems through an ErrorHandler (pylox/lang/error.py) instead of stopping the process.
"""

from pylox.lang.error import ErrorHandler, LoxError, LoxRuntimeError
from pylox.lang.evaluator import Evaluator
from pylox.lang.parser import Parser
from pylox.lang.scanner import Scanner

RECURSION_MESSAGE = "maximum recursion depth exceeded"


def scan(source, error_handler=None):
    """Returns the tokens of source, ending with EOF. Lexical errors are reported, never raised."""
    return Scanner(source, error_handler).scan_tokens()


def parse(tokens, error_handler=None):
    """Returns the statements parsed from tokens. Syntax errors are reported, never raised; nesting too deep to parse
    is reported as well and leaves no statements.
    """
    parser = Parser(tokens, error_handler)
    try:
        return parser.parse()
    except RecursionError:
        parser.error_handler.throw(LoxError(RECURSION_MESSAGE, parser.peek().line))
        return []


def run(source, env, output, error_handler=None):
    """Scans, parses and executes source in env, writing print output to output. Nothing is executed if source has
    lexical or syntax errors; a runtime error is reported and stops the remaining statements. Returns whether the run
    was free of errors.
    """
    if error_handler is None:
        error_handler = ErrorHandler(echo=False)
    reported = len(error_handler.errors)

    statements = parse(scan(source, error_handler), error_handler)
    if len(error_handler.errors) > reported:
        return False

    evaluator = Evaluator(output)
    try:
        for stmt in statements:
            evaluator.execute(stmt, env)
    except LoxRuntimeError as error:
        error_handler.throw(error)
        return False
    except RecursionError:
        error_handler.throw(LoxError(RECURSION_MESSAGE))
        return False

    return True
