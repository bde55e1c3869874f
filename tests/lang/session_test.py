import contextlib
import io
import os
import tempfile
import unittest

from pylox.lang.error import ErrorHandler, LoadError
from pylox.lang.session import Session
from pylox.lang.shell import Shell


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.output = io.StringIO()
        self.error_handler = ErrorHandler(echo=False)
        self.sess = Session(self.error_handler, Session.SH_FILE, self.output, cmd_line=True)

    def script(self, source):
        file = tempfile.NamedTemporaryFile("w", suffix=".lox", delete=False)
        with file:
            file.write(source)
        self.addCleanup(os.remove, file.name)
        return file.name

    def test_run_file(self):
        path = self.script("var greeting = \"hello\";\nprint greeting + \" world\";\n")
        sess = Session(self.error_handler, path, self.output)

        self.assertTrue(sess.run())
        self.assertEqual("hello world\n", self.output.getvalue())

    def test_missing_file(self):
        with self.assertRaises(LoadError):
            Session(self.error_handler, os.path.join(tempfile.gettempdir(), "missing", "script.lox"))

    def test_reserved_filename(self):
        with self.assertRaises(LoadError):
            Session(self.error_handler, Session.SH_FILE, cmd_line=False)

    def test_cmd_line_is_not_fatal(self):
        error_handler = ErrorHandler(fatal=True, echo=False)
        Session(error_handler, Session.SH_FILE, cmd_line=True)
        self.assertFalse(error_handler.fatal)

    def test_globals_persist(self):
        self.assertTrue(self.sess.run("var a = 1;"))
        self.assertTrue(self.sess.run("{ a = a + 1; }"))
        self.assertTrue(self.sess.run("print a;"))
        self.assertEqual("2\n", self.output.getvalue())
        self.assertIn("a", self.sess.env)

    def test_errors_are_per_run(self):
        self.assertFalse(self.sess.run("print undefined;"))
        self.assertEqual(1, len(self.error_handler.errors))

        self.assertTrue(self.sess.run("print 1;"))
        self.assertFalse(self.error_handler.had_error)

    def test_dumps(self):
        tokens = self.sess.tokens("var a = 1;")
        self.assertEqual(["var", "a", "=", "1", ";", ""], [token.lexeme for token in tokens])

        statements = self.sess.statements("var a = 1; print a;")
        self.assertEqual(["(var a 1)", "(print a)"], [str(stmt) for stmt in statements])
        self.assertEqual("", self.output.getvalue())


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.output = io.StringIO()
        self.sess = Session(ErrorHandler(echo=False), Session.SH_FILE, self.output, cmd_line=True)
        self.shell = Shell(self.sess, stdout=io.StringIO())

    def test_default(self):
        self.shell.onecmd("var a = 2;")
        self.shell.onecmd("print a * 3;")
        self.assertEqual("6\n", self.output.getvalue())

    def test_negation_is_not_a_shell_escape(self):
        self.shell.onecmd("!nil;")
        self.assertFalse(self.sess.error_handler.had_error)

        self.shell.onecmd("print !nil;")
        self.assertEqual("true\n", self.output.getvalue())

    def test_line_continuation(self):
        self.shell.onecmd("var i = 0; while (i < 2) {")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)
        self.assertEqual("", self.output.getvalue())

        self.shell.onecmd("print i; i = i + 1;")
        self.shell.onecmd("}")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertEqual("0\n1\n", self.output.getvalue())

    def test_commands_as_identifiers(self):
        self.shell.onecmd("var help = 1; var env = 1;")
        for line in ["help = 2;", "env = 3;", "help=help;", "env;"]:
            self.shell.onecmd(line)

        self.shell.onecmd("print help + env;")
        self.assertEqual("5\n", self.output.getvalue())
        self.assertFalse(self.shell.onecmd("exit = 1;"))

    def test_braces_in_strings(self):
        self.shell.onecmd("print \"{\";")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertEqual("{\n", self.output.getvalue())

        self.shell.onecmd("{ // }")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)
        self.shell.onecmd("print \"}\"; }")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertEqual("{\n}\n", self.output.getvalue())

    def test_commands_inside_open_block(self):
        self.shell.onecmd("var env = 1; {")
        self.assertFalse(self.shell.onecmd("env"))
        self.shell.onecmd("= 2; }")
        self.shell.onecmd("print env;")
        self.assertEqual("2\n", self.output.getvalue())

    def test_errors_do_not_exit(self):
        self.assertFalse(self.shell.onecmd("print 1 +;"))
        self.assertTrue(self.sess.error_handler.had_error)

        self.shell.onecmd("print 1;")
        self.assertEqual("1\n", self.output.getvalue())

    def test_env(self):
        self.shell.onecmd("var a = 1; var b;")
        listing = io.StringIO()
        with contextlib.redirect_stdout(listing):
            self.shell.onecmd("env")
        self.assertEqual("[a, b]\n", listing.getvalue())

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        self.assertFalse(self.shell.onecmd("exit now"))
        self.assertTrue(self.shell.onecmd("EOF"))
        self.assertFalse(self.shell.onecmd(""))


if __name__ == '__main__':
    unittest.main()
