"""Session control for pylox. Runs scripts, either in command-line mode or file interpretation mode, against one
persistent global scope.
"""

import sys

from pylox import interpreter
from pylox.lang.environment import Environment
from pylox.lang.error import LoadError


class Session:
    """Governs a pylox session, with control over the global scope shared by every run."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, output=None, cmd_line=False):
        self.error_handler = error_handler

        self.path = path                                          # used for error messages
        self.output = output if output is not None else sys.stdout  # print statements write here
        self.cmd_line = cmd_line                                  # whether or not in command-line mode

        self.env = Environment()  # global scope, survives between runs
        self.source = ""

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.source = file.read()
            except OSError:
                raise LoadError(f"'{path}' could not be opened")

        elif not cmd_line:
            raise LoadError(f"'{Session.SH_FILE}' is a reserved filename")

    def run(self, source=None):
        """Runs source (or the session's script) in the global scope. Returns whether the run was free of errors."""
        if source is not None:
            self.source = source

        self.error_handler.reset()
        self.error_handler.register_source(self.path, self.source)

        return interpreter.run(self.source, self.env, self.output, self.error_handler)

    def tokens(self, source=None):
        """Scans source (or the session's script) without running it."""
        source = self.source if source is None else source
        self.error_handler.register_source(self.path, source)
        return interpreter.scan(source, self.error_handler)

    def statements(self, source=None):
        """Parses source (or the session's script) without running it."""
        return interpreter.parse(self.tokens(source), self.error_handler)
