from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from placement_engine.schemas import skill_key

from .provider import TaxonomyProvider


class LocalTaxonomy(TaxonomyProvider):
    """Alias table for skill names typed into student profiles and job postings.

    ``extra_aliases`` lets a placement cell add campus-specific spellings on top
    of the bundled table; they win over bundled entries with the same key.
    """

    def __init__(
        self,
        synonyms_path: str | Path | None = None,
        extra_aliases: Mapping[str, str] | None = None,
    ) -> None:
        path = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        self._aliases = self._load_aliases(path)
        for alias, canonical in (extra_aliases or {}).items():
            self._aliases[skill_key(str(alias))] = str(canonical)

    @staticmethod
    def _load_aliases(path: Path) -> dict[str, str]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        return {skill_key(str(alias)): str(canonical) for alias, canonical in raw.items()}

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        cleaned = " ".join(raw.split())
        return cleaned, self._aliases.get(skill_key(cleaned))
