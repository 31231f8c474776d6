"""Collaborators shared by board parsing and single-item edits."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from kanbanmd.config import ParserConfig, Settings
from kanbanmd.hydrate import MetadataProvider
from kanbanmd.ids import IdGenerator, generate_instance_id


@dataclass
class BoardContext:
    """Parser config, settings lookup, ID generator and optional metadata provider.

    Pass SequentialIds() as ids for reproducible identities.
    """

    config: ParserConfig = field(default_factory=ParserConfig)
    settings: Settings = field(default_factory=Settings)
    ids: IdGenerator = generate_instance_id
    provider: MetadataProvider | None = None

    def with_settings(self, settings: dict) -> BoardContext:
        """Return a context using settings for lookups and parser triggers."""
        return replace(self, settings=Settings(settings), config=ParserConfig.from_settings(settings))
