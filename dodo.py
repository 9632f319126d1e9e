"""
doit tasks for building and testing Origami.
Run with: doit
"""

import os
from pathlib import Path

# Directories
OUTPUT_DIR = 'build'
EXAMPLES_DIR = 'examples'

# Origami example programs
EXAMPLES = sorted(str(p) for p in Path(EXAMPLES_DIR).glob('*.origami'))

# Python test files
PYTHON_TESTS = sorted(str(p) for p in Path('tests').glob('test_*.py'))

def ensure_output_dir():
    """Create output directory if it doesn't exist"""
    os.makedirs(OUTPUT_DIR, exist_ok=True)

def task_examples():
    """Compile each example to an importable module"""
    for source in EXAMPLES:
        target = os.path.join(OUTPUT_DIR, Path(source).with_suffix('.py').name)
        yield {
            'name': Path(source).stem,
            'actions': [(ensure_output_dir,), f'origami --mode module -o {target} {source}'],
            'file_dep': [source],
            'targets': [target],
            'clean': True,
        }

def task_test_python():
    """Run Python tests"""
    def run_python_tests():
        import pytest
        return pytest.main(['-v'] + PYTHON_TESTS) == 0

    return {
        'actions': [run_python_tests],
        'file_dep': PYTHON_TESTS,
        'verbosity': 2,
    }

def task_test():
    """Run all tests"""
    return {
        'actions': None,
        'task_dep': ['examples', 'test_python'],
    }
