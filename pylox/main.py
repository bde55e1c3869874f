"""Uses the Lox implementation to interpret .lox files/run in command-line mode. Also uses error handling context
manager. Called from the pylox executable script.
"""

import argparse
import sys

from pylox.grammar import nodes
from pylox.lang.error import ErrorHandler
from pylox.lang.session import Session
from pylox.lang.shell import Shell


def dump(sess, args):
    """Prints the tokens or syntax trees of sess's script instead of running it."""
    if args.tokens:
        for token in sess.tokens():
            print(token)
        return

    for stmt in sess.statements():
        if args.rpn and isinstance(stmt, (nodes.Expression, nodes.Print)):
            print(stmt.expression.rpn())
        else:
            print(stmt)


def main(argv=None):
    """Runs the pylox interpreter. Called from the pylox executable script. Returns the process exit status."""
    with ErrorHandler(fatal=True) as error_handler:
        parser = argparse.ArgumentParser(prog="pylox")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--tokens", help="print the token stream instead of running", action="store_true")
        parser.add_argument("--ast", help="print each statement's syntax tree instead of running", action="store_true")
        parser.add_argument("--rpn", help="like --ast, but print expressions in reverse Polish notation",
                            action="store_true")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            error_handler.fatal = False  # let the whole script report its errors before exiting

            if args.tokens or args.ast or args.rpn:
                dump(sess, args)
            else:
                sess.run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            error_handler.reset()  # errors inside the shell were already shown

    return error_handler.exit_code


if __name__ == "__main__":
    sys.exit(main())
