#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_source_headers.py
"""Unit tests for the license header form of the source modules."""

from pathlib import Path

import pytest

import styledmark

PACKAGE_ROOT = Path(styledmark.__file__).parent
COPYRIGHT = "#  Copyright (c) 2025 Tom Villani, Ph.D."
HEADED_SOURCES = sorted(
    path for path in PACKAGE_ROOT.rglob("*.py") if path.read_text(encoding="utf-8").startswith(COPYRIGHT)
)


@pytest.mark.unit
@pytest.mark.parametrize("path", HEADED_SOURCES, ids=[p.relative_to(PACKAGE_ROOT).as_posix() for p in HEADED_SOURCES])
def test_path_comment_follows_copyright_directly(path):
    lines = path.read_text(encoding="utf-8").splitlines()
    if lines[1] == "#":
        assert lines[2] == f"# src/{path.relative_to(PACKAGE_ROOT.parent).as_posix()}"
    else:
        assert lines[1].startswith('"""')
        assert not any(line.startswith("# src/") or line.startswith("# styledmark/") for line in lines[:5])
