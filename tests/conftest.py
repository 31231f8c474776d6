"""Shared fixtures for board tests."""

import pytest

from kanbanmd.context import BoardContext
from kanbanmd.ids import SequentialIds

SAMPLE_BOARD = """---

kanban-plugin: basic

---

## Todo

- [ ] Write release notes #docs @{2024-05-01}
- [ ] Review [[Roadmap]] #planning #q3
- [x] Book venue @{2024-06-10} @@{14:00} ^venue1


## Doing

**Complete**

- [ ] Draft budget



## Waiting



***

## Archive

- [x] Old task #legacy

%% kanban:settings
```
{"kanban-plugin":"basic"}
```
%%"""


@pytest.fixture
def context():
    """A context with reproducible IDs."""
    return BoardContext(ids=SequentialIds())


@pytest.fixture
def sample_text():
    return SAMPLE_BOARD
