import ast
import unittest
from pathlib import Path
import sys
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from origami.errors import TransformError
from origami.interop import (OrigamiExport, OrigamiImport, TRANSFORMS, module_reference,
                             transform)

def module_with(*nodes):
    return ast.Module(body=list(nodes), type_ignores=[])

class TestModuleReference(unittest.TestCase):
    def test_absolute(self):
        self.assertEqual(module_reference("shapes"), ("shapes", 0))
        self.assertEqual(module_reference("geometry/shapes"), ("geometry.shapes", 0))

    def test_relative(self):
        self.assertEqual(module_reference("./shapes"), ("shapes", 1))
        self.assertEqual(module_reference("../shapes"), ("shapes", 2))
        self.assertEqual(module_reference("../../lib/shapes"), ("lib.shapes", 3))

    def test_bad_paths(self):
        for source in ["", "./", "shapes.origami", "a//b", "my-shapes", "/abs"]:
            with self.assertRaises(TransformError, msg=source):
                module_reference(source)

class TestTransform(unittest.TestCase):
    def test_imports_become_from_imports(self):
        tree = module_with(OrigamiImport(names=["Shape", "_plus"], source="./shapes"))
        result = transform(tree)
        self.assertEqual(result.code, "from .shapes import Shape, _plus")
        self.assertIsInstance(result.tree.body[0], ast.ImportFrom)

    def test_exports_become_dunder_all(self):
        tree = module_with(OrigamiExport(names=["Shape", "area"]))
        self.assertEqual(transform(tree).code, "__all__ = ['Shape', 'area']")

    def test_other_statements_are_kept(self):
        tree = ast.parse("def area(s):\n    return s.radius")
        tree.body.append(OrigamiExport(names=["area"]))
        code = transform(tree).code
        self.assertIn("def area(s):", code)
        self.assertTrue(code.endswith("__all__ = ['area']"))
        compile(code, "<test>", "exec")

    def test_unknown_transform(self):
        with self.assertRaises(TransformError) as cm:
            transform(module_with(), ["amd-modules"])
        self.assertIn("amd-modules", cm.exception.message)

    def test_constructs_left_unrewritten(self):
        with self.assertRaises(TransformError):
            transform(module_with(OrigamiExport(names=[])), [])

    def test_bad_import_path(self):
        with self.assertRaises(TransformError):
            transform(module_with(OrigamiImport(names=["x"], source="./")))

    def test_registry(self):
        self.assertIn("python-import", TRANSFORMS)

if __name__ == '__main__':
    unittest.main()
