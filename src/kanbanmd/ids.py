"""Instance ID generation for lanes and cards."""

import secrets
from typing import Callable

IdGenerator = Callable[[], str]


def generate_instance_id() -> str:
    """Return a random, practically unique instance ID."""
    return secrets.token_hex(6)


def next_id(current_max: str | None) -> str:
    """Generate the next ID after current_max.

    - If None, returns "1"
    - If numeric (e.g., "9"), returns str(int + 1) (e.g., "10")
    - If non-numeric (e.g., "fish"), returns "1" + "0" * len (e.g., "10000")
    """
    if current_max is None:
        return "1"

    try:
        return str(int(current_max) + 1)
    except ValueError:
        return "1" + "0" * len(current_max)


class SequentialIds:
    """Deterministic ID generator: "lane-1", "lane-2", ... for a given prefix.

    Each instance keeps its own counter, so two generators built the same
    way hand out the same sequence.
    """

    def __init__(self, prefix: str = "", start: str | None = None) -> None:
        self.prefix = prefix
        self._last = start

    def __call__(self) -> str:
        self._last = next_id(self._last)
        return f"{self.prefix}{self._last}"
