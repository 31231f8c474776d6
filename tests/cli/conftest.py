"""Shared fixtures for CLI tests."""

import pytest


@pytest.fixture
def board_file(tmp_path, sample_text):
    """Write the sample board to a temporary file."""
    path = tmp_path / "board.md"
    path.write_text(sample_text, encoding="utf-8")
    return path
