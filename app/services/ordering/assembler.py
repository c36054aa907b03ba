"""Assemble priced parse results."""
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from app.services.menu.base import MenuItem
from app.services.ordering.index import SearchHit
from app.services.ordering.models import (
    AlternativeMatch,
    MatchedItem,
    MatchedModifier,
    OrderMatch,
    ParseErrorCode,
    ParseResult,
    RequiredModifierGroup,
    RequiredOption,
)

CENT = Decimal("0.01")

ERROR_MESSAGES = {
    ParseErrorCode.INDEX_UNAVAILABLE: "Menu is unavailable for this restaurant",
    ParseErrorCode.EMPTY_UTTERANCE: "No meaningful words found in speech",
    ParseErrorCode.NO_MATCH: "No matching menu item found",
    ParseErrorCode.WEAK_MATCH: "No strong match found. Did you mean one of the alternatives?",
}


def calculate_price(base_price: Decimal, matched: List[MatchedModifier]) -> Decimal:
    """Base price plus modifier deltas, rounded half-up to cents."""
    total = base_price + sum((modifier.option_price for modifier in matched), Decimal("0"))
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def remaining_required(item: MenuItem, matched: List[MatchedModifier]) -> List[RequiredModifierGroup]:
    """Required groups with no matched option; defaults are never applied."""
    matched_groups = {modifier.group_name for modifier in matched}
    return [
        RequiredModifierGroup(
            group_name=group.name,
            required=group.required,
            options=[
                RequiredOption(name=option.name, price=option.price, is_default=option.is_default)
                for option in group.options
            ],
        )
        for group in item.modifiers
        if group.required and group.name not in matched_groups
    ]


def to_alternatives(hits: List[SearchHit]) -> List[AlternativeMatch]:
    return [
        AlternativeMatch(name=hit.item.name, confidence=hit.confidence, category=hit.item.category)
        for hit in hits
    ]


def build_success(
    item: MenuItem,
    confidence: float,
    matched: List[MatchedModifier],
    alternatives: List[SearchHit],
    unmatched_tokens: List[str],
) -> ParseResult:
    """Package a successful match."""
    return ParseResult(
        success=True,
        match=OrderMatch(
            item=MatchedItem(
                name=item.name,
                price=item.price,
                category=item.category,
                description=item.description,
            ),
            confidence=confidence,
            matched_modifiers=matched,
            remaining_required_modifiers=remaining_required(item, matched),
            calculated_price=calculate_price(item.price, matched),
            unmatched_tokens=unmatched_tokens,
        ),
        alternative_matches=to_alternatives(alternatives),
    )


def build_failure(
    code: ParseErrorCode, alternatives: Optional[List[SearchHit]] = None
) -> ParseResult:
    """Package a failed parse; errors are always returned, never raised."""
    if code == ParseErrorCode.NO_MATCH and alternatives:
        code = ParseErrorCode.WEAK_MATCH
    return ParseResult(
        success=False,
        alternative_matches=to_alternatives(alternatives or []),
        error=ERROR_MESSAGES[code],
        error_code=code,
    )
