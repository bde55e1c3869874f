"""Error handling for pylox. Every problem the scanner, parser or evaluator runs into is a LoxError reported through an
ErrorHandler; if another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an
internal issue.

The handler doubles as the per-run error accumulator: nothing in pylox keeps a process-wide "had error" flag.
"""

import sys

from termcolor import colored

from pylox.grammar.tokens import TokenType


class LoxError(Exception):
    """Structured pylox error: what kind of error, where, why. Subclasses only change kind."""
    kind = "error"

    def __init__(self, message, line=None, where="", lexeme=None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.where = where    # " at 'x'", " at end" or ""
        self.lexeme = lexeme  # offending source text, used for diagnosis

    @classmethod
    def at(cls, token, message):
        """Builds an error located at token."""
        if token.kind == TokenType.EOF:
            return cls(message, token.line, " at end")
        return cls(message, token.line, f" at '{token.lexeme}'", token.lexeme)

    def __str__(self):
        if self.line is None:
            return self.message
        return f"[line {self.line}] Error{self.where}: {self.message}"

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r}, line={self.line})"


class ScanError(LoxError):
    """Unexpected character or unterminated string."""
    kind = "lexical"


class ParseError(LoxError):
    """Structural violation found by the parser. Caught at the declaration boundary so parsing can resynchronize."""
    kind = "syntax"


class LoxRuntimeError(LoxError):
    """Type mismatch or undefined variable found while evaluating."""
    kind = "runtime"


class LoadError(LoxError):
    """Script could not be read."""
    kind = "io"


class ErrorHandler:
    """Reports pylox errors/warnings and records them for the current run. Also a context manager that converts Python
    errors escaping a run into reported pylox errors.
    """
    ERROR = "red"
    WARNING = "magenta"

    EXIT_CODES = {
        ScanError.kind: 65,
        ParseError.kind: 65,
        LoadError.kind: 66,
        LoxRuntimeError.kind: 70,
    }

    def __init__(self, fatal=False, echo=True):
        self.fatal = fatal
        self.echo = echo
        self.errors = []
        self.source = None  # (file, source text) of the current run, used for diagnosis

    def register_source(self, path, source):
        """Registers source so that reported errors can show the offending line."""
        self.source = (path, source)

    def reset(self):
        """Forgets errors of the previous run. Must be called at the start of each independent run."""
        self.errors = []

    @property
    def had_error(self):
        return bool(self.errors)

    @property
    def exit_code(self):
        """Process exit status matching the first recorded error (0 if there were none)."""
        if not self.errors:
            return 0
        return ErrorHandler.EXIT_CODES.get(self.errors[0].kind, 1)

    def report(self, line, where, message, kind=LoxError):
        """Reports a problem at line. where is " at 'lexeme'", " at end" or empty."""
        lexeme = where[5:-1] if where.startswith(" at '") else None
        self.throw(kind(message, line, where, lexeme))

    def _source_line(self, line_num):
        if self.source is None or line_num is None:
            return None
        lines = self.source[1].split("\n")
        return lines[line_num - 1] if 0 < line_num <= len(lines) else None

    def diagnose(self, error):
        """Returns the offending line with error.lexeme highlighted and underlined, or None if it cannot be located."""
        line = self._source_line(error.line)
        if line is None or not error.lexeme or error.lexeme not in line:
            return None

        color = ErrorHandler.ERROR
        start = line.index(error.lexeme)
        end = start + len(error.lexeme)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, message, line=None):
        """Prints a warning. Warnings do not mark the run as failed."""
        if not self.echo:
            return

        warning_msg = colored(f"[line {line}] ", attrs=["bold"]) if line is not None else ""
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + message
        print(warning_msg)

    def throw(self, error, internal=False):
        """Records and prints error. Exits the process only if this handler is fatal."""
        self.errors.append(error)

        if self.echo:
            error_msg = colored(f"[line {error.line}] ", attrs=["bold"]) if error.line is not None else ""
            if internal:
                error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
            elif error.kind in ErrorHandler.EXIT_CODES:
                error_msg += f"{error.kind} "

            error_msg += colored("error", ErrorHandler.ERROR, attrs=["bold"])
            error_msg += f"{error.where}: " + error.message
            print(error_msg, file=sys.stderr)

            diagnosis = None if internal else self.diagnose(error)
            if diagnosis:
                print(diagnosis, file=sys.stderr)

        if self.fatal:
            sys.exit(self.exit_code if not internal else 1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LoxError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LoxError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, LoxError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LoxError(f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)
            do_exit = True

        return not do_exit
