"""Parser configuration and board settings lookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

FRONTMATTER_KEY = "kanban-plugin"
SETTINGS_MARKER = "kanban:settings"


@dataclass(frozen=True)
class Labels:
    """Human-readable structural markers compared against headings and paragraphs."""

    archive: str = "Archive"
    complete: str = "Complete"


_LOCALES: dict[str, Labels] = {
    "en": Labels(),
    "de": Labels(archive="Archiv", complete="Erledigt"),
    "es": Labels(archive="Archivo", complete="Completado"),
    "fr": Labels(archive="Archives", complete="Terminé"),
    "it": Labels(archive="Archivio", complete="Completato"),
    "nl": Labels(archive="Archief", complete="Voltooid"),
    "pt-br": Labels(archive="Arquivo", complete="Concluído"),
}


def labels_for(locale: str | None) -> Labels:
    """Return the labels for a locale such as "de" or "pt-BR", defaulting to English."""
    if not locale:
        return _LOCALES["en"]
    key = locale.strip().lower().replace("_", "-")
    if key in _LOCALES:
        return _LOCALES[key]
    return _LOCALES.get(key.split("-")[0], _LOCALES["en"])


@dataclass(frozen=True)
class ParserConfig:
    """Everything the parser compares against: labels and sigil triggers."""

    labels: Labels = field(default_factory=Labels)
    date_trigger: str = "@"
    time_trigger: str = "@@"
    settings_marker: str = SETTINGS_MARKER

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any] | None) -> ParserConfig:
        """Build a config from a board's settings dict, falling back to defaults."""
        lookup = Settings(settings)
        return cls(
            labels=labels_for(lookup.get("locale")),
            date_trigger=lookup.get("date-trigger") or "@",
            time_trigger=lookup.get("time-trigger") or "@@",
        )


DEFAULT_SETTINGS: dict[str, Any] = {
    "locale": "en",
    "date-trigger": "@",
    "time-trigger": "@@",
    "date-format": "YYYY-MM-DD",
    "time-format": "HH:mm",
    "metadata-keys": [],
    "link-date-to-daily-note": False,
    "hide-date-in-title": False,
    "hide-tags-in-title": False,
}


class Settings:
    """Read-only key lookup over a board's settings, layered on the defaults."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> Any:
        if key in self._values:
            return self._values[key]
        return DEFAULT_SETTINGS.get(key)

    def metadata_keys(self) -> list[str]:
        """Names of the linked-file metadata keys to surface, without duplicates."""
        keys: list[str] = []
        for entry in self.get("metadata-keys") or []:
            key = entry.get("metadataKey") if isinstance(entry, Mapping) else entry
            if key and key not in keys:
                keys.append(key)
        return keys

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"<Settings [{', '.join(self._values)}]>"
