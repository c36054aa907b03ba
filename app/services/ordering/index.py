"""Approximate search over a restaurant's menu items."""
import logging
from typing import FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.core.config import MatcherConfig
from app.services.menu.base import Menu, MenuItem
from app.services.ordering.normalizer import normalize_text
from app.services.ordering.similarity import best_window, bigrams, similarity

logger = logging.getLogger(__name__)


class SearchHit(BaseModel):
    """One ranked search result; lower score is better."""

    model_config = ConfigDict(frozen=True)

    item: MenuItem
    score: float
    position: int  # Declaration order in the menu

    @property
    def confidence(self) -> float:
        return round((1 - self.score) * 100) / 100


class MenuIndex:
    """
    Flattened, pre-normalized view of a menu for fuzzy item search.

    Instances are never mutated after build, so one index can serve
    any number of concurrent readers.
    """

    def __init__(
        self,
        items: Tuple[MenuItem, ...],
        config: Optional[MatcherConfig] = None,
        version: Optional[str] = None,
    ):
        self.items = items
        self.config = config or MatcherConfig()
        self.version = version
        self._fields: Tuple[Tuple[str, str], ...] = tuple(
            (normalize_text(item.name), normalize_text(item.description)) for item in items
        )
        self._field_bigrams: Tuple[Tuple[FrozenSet[str], FrozenSet[str]], ...] = tuple(
            (bigrams(name), bigrams(description)) for name, description in self._fields
        )

    @classmethod
    def build(cls, menu: Menu, config: Optional[MatcherConfig] = None) -> "MenuIndex":
        """Flatten the category tree into one searchable collection."""
        index = cls(tuple(menu.items), config=config, version=menu.version)
        logger.info(f"[INDEX] Built menu index - {len(index)} items, version: {menu.version}")
        return index

    def __len__(self) -> int:
        return len(self.items)

    def _field_score(
        self, query: str, query_bigrams: FrozenSet[str], field: str, field_bigrams: FrozenSet[str]
    ) -> Optional[float]:
        """Score one field, or None when the field does not match at all."""
        if not field or query_bigrams.isdisjoint(field_bigrams):
            return None
        threshold = self.config.field_match_threshold
        # Cheap lower bound before running the alignment
        if (len(query) - len(field)) / len(query) > threshold:
            return None
        # Edits per query character, since the window is never longer than the query
        ratio = 1.0 - similarity(query, best_window(query, field))
        if ratio > threshold:
            return None
        return ratio ** self.config.score_exponent

    def score(
        self, query: str, position: int, query_bigrams: Optional[FrozenSet[str]] = None
    ) -> Optional[float]:
        """Weighted score of one item against a normalized query."""
        if query_bigrams is None:
            query_bigrams = bigrams(query)
        name, description = self._fields[position]
        name_bigrams, description_bigrams = self._field_bigrams[position]
        weighted = [
            (self._field_score(query, query_bigrams, name, name_bigrams), self.config.name_weight),
            (
                self._field_score(query, query_bigrams, description, description_bigrams),
                self.config.description_weight,
            ),
        ]
        matched = [(score, weight) for score, weight in weighted if score is not None and weight > 0]
        if not matched:
            return None
        total_weight = sum(weight for _, weight in matched)
        return sum(score * weight for score, weight in matched) / total_weight

    def search(self, query: str) -> List[SearchHit]:
        """
        Rank items against a query.

        Args:
            query: Free text; normalized the same way as menu fields

        Returns:
            Matching items, best first. Equal scores keep menu order.
        """
        query = normalize_text(query)
        if not query:
            return []
        query_bigrams = bigrams(query)
        hits = []
        for position, item in enumerate(self.items):
            score = self.score(query, position, query_bigrams)
            if score is not None:
                hits.append(SearchHit(item=item, score=score, position=position))
        hits.sort(key=lambda hit: (hit.score, hit.position))
        return hits
