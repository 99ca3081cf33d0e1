import unittest
import sys
import os
from pathlib import Path

# Add parent directory to import path
parent_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(parent_dir))

from utils.logger import Logger

# Keep test runs from writing session logs
Logger.log_to_file = False


def run_all_tests():
    """Run all tests in the tests directory"""
    test_dir = os.path.dirname(os.path.abspath(__file__))
    current_file = os.path.basename(__file__)

    # Discover and collect all test files ending with _test.py
    test_suite = unittest.defaultTestLoader.discover(test_dir, pattern='*_test.py', top_level_dir=test_dir)

    # Filter out this file from the test suite
    filtered_suite = unittest.TestSuite()
    for suite in test_suite:
        for test_case in suite:
            if current_file not in str(test_case):
                filtered_suite.addTest(test_case)

    runner = unittest.TextTestRunner(verbosity=2, buffer=False)
    result = runner.run(filtered_suite)

    return result.wasSuccessful()


if __name__ == '__main__':
    success = run_all_tests()

    # Exit with appropriate code (0 for success, 1 for failure)
    sys.exit(0 if success else 1)
