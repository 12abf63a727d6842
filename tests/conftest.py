import os
import sys

import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from fish_emulator.config import structure_from_mapping
from fish_emulator.state import SessionState

STRUCTURE = {
    '.privateDir': {},
    'dir1': {
        'childDir': {},
        'dir1File': {'content': 'Contents of a file inside dir1'},
    },
    'file1': {'content': 'Contents of file 1'},
    '.hiddenFile': {'content': 'secret'},
}


@pytest.fixture
def state():
    """A session at the root of a small tree with an empty transcript."""
    return SessionState(
        structure=structure_from_mapping(STRUCTURE),
        settings={'user': {'username': 'tester'}},
    )
