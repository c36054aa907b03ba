"""Order parsing service."""
import logging
from typing import Optional

from app.core.config import MatcherConfig
from app.services.menu.base import Menu
from app.services.ordering import assembler
from app.services.ordering.cache import IndexCache
from app.services.ordering.index import MenuIndex
from app.services.ordering.item_matcher import ItemMatcher
from app.services.ordering.modifier_matcher import match_modifiers, over_selected_groups
from app.services.ordering.models import ParseErrorCode, ParseResult
from app.services.ordering.normalizer import normalize

logger = logging.getLogger(__name__)


class OrderParser:
    """Turns one transcribed utterance into a priced order line."""

    def __init__(self, cache: Optional[IndexCache] = None, config: Optional[MatcherConfig] = None):
        self.cache = cache
        self.config = config or MatcherConfig()

    def get_index(self, menu: Menu, restaurant_key: Optional[str] = None) -> MenuIndex:
        """
        Get the menu index, building it on first use.

        A cached index built from a different menu version is rebuilt.
        Concurrent rebuilds are harmless: the last one stored wins.
        """
        if restaurant_key is None or self.cache is None:
            return MenuIndex.build(menu, self.config)

        index = self.cache.get(restaurant_key)
        if index is not None and index.version == menu.version:
            return index

        index = MenuIndex.build(menu, self.config)
        self.cache.set(restaurant_key, index)
        return index

    def invalidate_index(self, restaurant_key: Optional[str] = None) -> None:
        """Forget cached indices after a menu change."""
        if self.cache is not None:
            self.cache.invalidate(restaurant_key)

    def parse_order(
        self, menu: Optional[Menu], utterance: str, restaurant_key: Optional[str] = None
    ) -> ParseResult:
        """
        Parse an utterance against a menu snapshot.

        Args:
            menu: Resolved, customer-visible menu; None if it could not be loaded
            utterance: Transcribed speech
            restaurant_key: Cache key (e.g. the restaurant's phone number)

        Returns:
            ParseResult. Failures are reported in the result, never raised.
        """
        if menu is None or not menu.items:
            logger.warning(f"[PARSE] Menu unavailable - restaurant: {restaurant_key}")
            return assembler.build_failure(ParseErrorCode.INDEX_UNAVAILABLE)

        tokens = normalize(utterance)
        if not tokens:
            logger.info(f"[PARSE] No meaningful words in utterance: '{utterance}'")
            return assembler.build_failure(ParseErrorCode.EMPTY_UTTERANCE)

        index = self.get_index(menu, restaurant_key)
        outcome = ItemMatcher(index, self.config).match(tokens)

        if outcome.accepted is None:
            alternatives = outcome.hits[: self.config.max_alternatives]
            logger.info(
                f"[PARSE] No item match - tokens: {tokens}, "
                f"alternatives: {[hit.item.name for hit in alternatives]}"
            )
            return assembler.build_failure(ParseErrorCode.NO_MATCH, alternatives)

        candidate = outcome.accepted
        item = candidate.item
        modifiers = match_modifiers(
            outcome.remaining_tokens(tokens), item, max_window=self.config.max_modifier_window
        )

        over_selected = over_selected_groups(item, modifiers.matched)
        if over_selected:
            logger.warning(f"[PARSE] Too many selections for '{item.name}' in groups: {over_selected}")
        if modifiers.unmatched_tokens:
            logger.debug(f"[PARSE] Unmatched tokens: {modifiers.unmatched_tokens}")

        logger.info(
            f"[PARSE] Matched '{item.name}' - confidence: {candidate.confidence}, "
            f"modifiers: {[m.option_name for m in modifiers.matched]}"
        )
        return assembler.build_success(
            item=item,
            confidence=candidate.confidence,
            matched=modifiers.matched,
            alternatives=candidate.alternatives(self.config.max_alternatives, exclude=item.name),
            unmatched_tokens=modifiers.unmatched_tokens,
        )
