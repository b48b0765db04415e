"""
Pytest configuration and shared fixtures for the check_fxml_controller test suite.

This module provides common test fixtures and utilities used across multiple test files.
"""

import sys
import os
import tempfile
import pytest

# Add parent directory to path to import the module under test
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def temp_file():
    """
    Fixture to create and cleanup temporary FXML or controller files.

    Usage:
        def test_something(temp_file):
            fxml_path = temp_file('<VBox/>', '.fxml')
            # fxml_path is automatically cleaned up after the test

    Yields:
        A function that creates a temporary file with the given content and
        suffix and returns its path. The file is deleted after the test.
    """
    temp_files = []

    def _create_temp_file(content, suffix):
        """Create a temporary file with the given content."""
        with tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False,
                                         encoding='utf-8') as f:
            temp_path = f.name
            f.write(content)
        temp_files.append(temp_path)
        return temp_path

    yield _create_temp_file

    # Cleanup all created temporary files
    for path in temp_files:
        if os.path.exists(path):
            try:
                os.remove(path)
            except OSError:
                pass  # Ignore cleanup errors


def get_script_path():
    """
    Get the absolute path to the main check_fxml_controller.py script.

    Returns:
        str: Absolute path to the script
    """
    return os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        'check_fxml_controller.py'
    )


@pytest.fixture
def script_path():
    """
    Fixture that provides the path to the main script.

    Usage:
        def test_something(script_path):
            result = subprocess.run([sys.executable, script_path, ...])
    """
    return get_script_path()
