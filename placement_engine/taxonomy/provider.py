from __future__ import annotations

from typing import Protocol


class TaxonomyProvider(Protocol):
    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        """Whitespace-collapsed skill text plus the canonical skill name, if the alias is known."""
