"""Shared fixtures for steamid tests.

tools/ is not a package, so it is put on sys.path to let the CLI tests
import tools/sid.py as a module.
"""
import sys
from pathlib import Path

import pytest

tools_dir = Path(__file__).parent.parent / "tools"
if str(tools_dir) not in sys.path:
    sys.path.insert(0, str(tools_dir))


# 76561197970669109 = [U:1:10403381], instance 1
KNOWN_ID = 76561197970669109


@pytest.fixture
def known_id():
    return KNOWN_ID
