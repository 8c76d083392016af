"""
Test suite of the those package. Run with `python -m unittest those.tests` or pytest.
"""
import os
import unittest

_TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(os.path.dirname(_TESTS_DIR))


def load_tests(loader: unittest.TestLoader, standard_tests: unittest.TestSuite, pattern):
    standard_tests.addTests(
        loader.discover(start_dir=_TESTS_DIR, pattern=pattern or 'test_*.py', top_level_dir=_PROJECT_ROOT))
    return standard_tests
