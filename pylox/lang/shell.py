"""Handles interactive/command-line mode for pylox. Uses cmd as backend."""

import cmd

from pylox import interpreter
from pylox.grammar.tokens import TokenType
from pylox.lang.error import ErrorHandler


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def parseline(self, line):
        """Like cmd.Cmd.parseline, but only a command word followed by plain words is a command. Anything else, such as
        "help = 2;" or "!nil;", is Lox source. While a brace is still open, every line but end of input is Lox source.
        """
        if self._tmp_line and line != "EOF":
            return None, None, line

        command, arg, line = super().parseline(line)
        if command and hasattr(self, "do_" + command) and all(word.isidentifier() for word in arg.split()):
            return command, arg, line
        return None, None, line

    @staticmethod
    def open_braces(source):
        """Number of unclosed braces in source. Braces inside strings and comments do not count."""
        tokens = interpreter.scan(source, ErrorHandler(echo=False))
        return sum(1 if token.kind == TokenType.LEFT_BRACE else -1 for token in tokens
                   if token.kind in (TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE))

    def default(self, line):
        """Executes arbitrary Lox source. Entries with unclosed braces continue on the next line."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line + "\n"

            if self.open_braces(line) > 0:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            self.sess.run(line)

    def do_env(self, arg):
        """Shows the names bound in the global scope."""
        print(repr(self.sess.env))

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Lox interpreter!\n\n"
              "Lox is a small dynamically-typed scripting language. This interpreter supports \n"
              "numbers, strings, booleans and nil, arithmetic and comparison operators, \n"
              "variables with block scope, and if/else, while and print statements.\n\n"
              "Try it out by typing 'var greeting = \"hello\";'. Next, try typing \n"
              "'print greeting + \" world\";'. Type 'env' to list global variables.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn(f"unrecognized argument to exit: '{arg}'")
            return False
        return True
