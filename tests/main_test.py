import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from pylox.main import main


class MainTestCase(unittest.TestCase):

    def script(self, source):
        file = tempfile.NamedTemporaryFile("w", suffix=".lox", delete=False)
        with file:
            file.write(source)
        self.addCleanup(os.remove, file.name)
        return file.name

    def run_main(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            try:
                code = main(list(argv))
            except SystemExit as exit:
                code = exit.code
        return code, stdout.getvalue(), stderr.getvalue()

    def test_run(self):
        code, out, err = self.run_main(self.script("var i = 0;\nwhile (i < 3) { print i; i = i + 1; }\n"))
        self.assertEqual(0, code)
        self.assertEqual("0\n1\n2\n", out)
        self.assertEqual("", err)

    def test_exit_codes(self):
        cases = {
            "print 1 +;\nprint ;": 65,
            "print \"unterminated;": 65,
            "print 1;\nprint -\"a\";": 70,
            "x = 1;": 70,
        }
        for case, expected in cases.items():
            code, out, err = self.run_main(self.script(case))
            self.assertEqual(expected, code, case)
            self.assertIn("error", err, case)

        code, out, err = self.run_main(os.path.join(tempfile.gettempdir(), "missing", "script.lox"))
        self.assertEqual(66, code)
        self.assertIn("could not be opened", err)

    def test_dumps(self):
        path = self.script("print 1 + 2 * 3;\nvar a = 1;")

        code, out, err = self.run_main(path, "--tokens")
        self.assertEqual(0, code)
        self.assertEqual("PRINT print", out.splitlines()[0])
        self.assertEqual("EOF ", out.splitlines()[-1])

        code, out, err = self.run_main(path, "--ast")
        self.assertEqual(["(print (+ 1 (* 2 3)))", "(var a 1)"], out.splitlines())

        code, out, err = self.run_main(path, "--rpn")
        self.assertEqual(["1 2 3 * +", "(var a 1)"], out.splitlines())


if __name__ == '__main__':
    unittest.main()
