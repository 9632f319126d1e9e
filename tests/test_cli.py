import contextlib
import io
import logging
import shutil
import tempfile
import unittest
from unittest import mock
from pathlib import Path
import sys
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from origami.origami import main, output_path

EXAMPLES = Path(__file__).parent.parent / 'examples'

class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.dir)

    def write(self, name, source):
        path = self.dir / name
        path.write_text(source)
        return str(path)

    def run_main(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        code = 0
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            try:
                main(list(argv))
            except SystemExit as e:
                code = e.code
        return code, stdout.getvalue(), stderr.getvalue()

    def test_writes_output_file(self):
        target = self.dir / "shapes.py"
        code, _, _ = self.run_main(str(EXAMPLES / "shapes.origami"), "-o", str(target))
        self.assertEqual(code, 0)
        self.assertIn("class Shape:", target.read_text())

    def test_module_mode_into_directory(self):
        out = self.dir / "build"
        code, _, _ = self.run_main(
            str(EXAMPLES / "shapes.origami"), str(EXAMPLES / "geometry.origami"),
            "--mode", "module", "-o", str(out),
        )
        self.assertEqual(code, 0)
        self.assertIn("from shapes import Shape, area", (out / "geometry.py").read_text())
        self.assertIn("__all__ = ['Shape', 'square', 'area']", (out / "shapes.py").read_text())

    def test_run(self):
        source = self.write("fact.origami", """
        define factorial(n) { return if n <= 1 then 1 else n * factorial(n - 1); }
        define main() { return factorial(6); }
        """)
        code, out, _ = self.run_main(source, "--run")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "720")

    def test_run_needs_script_mode(self):
        source = self.write("f.origami", "define main() { return 1; }")
        code, _, _ = self.run_main(source, "--run", "--mode", "module")
        self.assertEqual(code, 2)

    def test_runtime_error(self):
        source = self.write("boom.origami", "define main() { return 1 / 0; }")
        code, _, err = self.run_main(source, "--run")
        self.assertEqual(code, 1)
        self.assertIn("ZeroDivisionError", err)

    def test_parse_error(self):
        source = self.write("bad.origami", "union Shape {")
        code, _, err = self.run_main(source)
        self.assertEqual(code, 1)
        self.assertIn("ParseError", err)
        self.assertIn("bad.origami", err)
        self.assertFalse((self.dir / "bad.py").exists())

    def test_dump_ast(self):
        source = self.write("t.origami", "union T { A }")
        code, out, _ = self.run_main(source, "--dump-ast", "-o", str(self.dir / "t_out.py"))
        self.assertEqual(code, 0)
        self.assertIn('"SumTypeDeclaration"', out)

    def test_debug_option_sets_log_level(self):
        source = self.write("d.origami", "union T { A }")
        for flags, level in [([], logging.WARNING), (["--debug"], logging.DEBUG)]:
            with mock.patch("origami.origami.logging.basicConfig") as basic_config:
                code, _, _ = self.run_main(source, "-o", str(self.dir / "d_out.py"), *flags)
            self.assertEqual(code, 0)
            self.assertEqual(basic_config.call_args.kwargs["level"], level)

    def test_output_path(self):
        self.assertEqual(output_path(Path("a/b.origami"), None, False), Path("a/b.py"))
        self.assertEqual(output_path(Path("a/b.origami"), "out", True), Path("out/b.py"))
        self.assertEqual(output_path(Path("a/b.origami"), "x.py", False), Path("x.py"))

if __name__ == '__main__':
    unittest.main()
