"""Best menu item for a token sequence."""
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from app.core.config import MatcherConfig
from app.services.menu.base import MenuItem
from app.services.ordering.index import MenuIndex, SearchHit

logger = logging.getLogger(__name__)


class ItemCandidate(BaseModel):
    """Best item seen so far, with the token window that produced it."""

    model_config = ConfigDict(frozen=True)

    item: MenuItem
    score: float
    start: int
    end: int
    hits: List[SearchHit]  # Full result list of the winning search

    @property
    def confidence(self) -> float:
        return round((1 - self.score) * 100) / 100

    def alternatives(self, limit: int, exclude: Optional[str] = None) -> List[SearchHit]:
        """Top distinct-named hits from the winning search."""
        seen = set()
        picked = []
        for hit in self.hits:
            if hit.item.name == exclude or hit.item.name in seen:
                continue
            seen.add(hit.item.name)
            picked.append(hit)
            if len(picked) >= limit:
                break
        return picked


class ItemMatchOutcome(BaseModel):
    """Result of item matching: an accepted candidate, the best rejected one, or neither."""

    model_config = ConfigDict(frozen=True)

    accepted: Optional[ItemCandidate] = None
    rejected: Optional[ItemCandidate] = None
    hits: List[SearchHit] = []

    def remaining_tokens(self, tokens: List[str]) -> List[str]:
        """Tokens outside the window consumed by the accepted item."""
        if self.accepted is None:
            return list(tokens)
        return tokens[: self.accepted.start] + tokens[self.accepted.end:]


class ItemMatcher:
    """Finds the menu item a caller most likely meant."""

    def __init__(self, index: MenuIndex, config: Optional[MatcherConfig] = None):
        self.index = index
        self.config = config or index.config
        # Overlapping windows repeat queries, so results are kept for one match
        self._searches: Dict[str, List[SearchHit]] = {}

    def _search(self, query: str) -> List[SearchHit]:
        if query not in self._searches:
            self._searches[query] = self.index.search(query)
        return self._searches[query]

    def _full_phrase(self, tokens: List[str]) -> tuple[Optional[ItemCandidate], List[SearchHit]]:
        hits = self._search(" ".join(tokens))
        if hits and hits[0].score < self.config.strong_match_threshold:
            return (
                ItemCandidate(
                    item=hits[0].item, score=hits[0].score, start=0, end=len(tokens), hits=hits
                ),
                hits,
            )
        return None, hits

    def _sub_phrase(self, tokens: List[str]) -> Optional[ItemCandidate]:
        """Search contiguous windows, longest first, left to right."""
        best: Optional[ItemCandidate] = None
        for length in range(len(tokens), 0, -1):
            for start in range(len(tokens) - length + 1):
                window = tokens[start:start + length]
                hits = self._search(" ".join(window))
                if not hits:
                    continue
                adjusted = max(0.0, hits[0].score - self.config.length_bonus * length)
                if best is None or adjusted < best.score:
                    best = ItemCandidate(
                        item=hits[0].item,
                        score=adjusted,
                        start=start,
                        end=start + length,
                        hits=hits,
                    )
            # Shorter windows cannot meaningfully beat a strong match
            if best is not None and best.score < self.config.strong_match_threshold:
                break
        return best

    def match(self, tokens: List[str]) -> ItemMatchOutcome:
        """
        Match tokens to a menu item.

        Tries the whole utterance first; if that is not a strong match,
        falls back to sub-phrase search.

        Args:
            tokens: Normalized tokens, in spoken order

        Returns:
            ItemMatchOutcome with ``accepted`` set when the best candidate
            scores within the acceptance threshold.
        """
        if not tokens:
            return ItemMatchOutcome()

        candidate, full_hits = self._full_phrase(tokens)
        if candidate is None:
            candidate = self._sub_phrase(tokens)

        if candidate is None:
            logger.debug(f"[MATCH] No candidates for tokens {tokens}")
            return ItemMatchOutcome(hits=full_hits)

        if candidate.score > self.config.acceptance_threshold:
            logger.debug(
                f"[MATCH] Best candidate '{candidate.item.name}' rejected - score: {candidate.score:.3f}"
            )
            return ItemMatchOutcome(rejected=candidate, hits=candidate.hits)

        logger.debug(
            f"[MATCH] Matched '{candidate.item.name}' - score: {candidate.score:.3f}, "
            f"window: {tokens[candidate.start:candidate.end]}"
        )
        return ItemMatchOutcome(accepted=candidate, hits=candidate.hits)
