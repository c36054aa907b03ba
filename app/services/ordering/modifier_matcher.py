"""Resolve modifier selections from the tokens left after item matching."""
import logging
from typing import List, Set

from pydantic import BaseModel, ConfigDict

from app.services.menu.base import MenuItem, ModifierGroup, ModifierOption
from app.services.ordering.models import MatchedModifier
from app.services.ordering.normalizer import normalize_option_name
from app.services.ordering.similarity import is_close_match

logger = logging.getLogger(__name__)


class ModifierCandidate(BaseModel):
    """A (group, option) pair prepared for comparison against spoken tokens."""

    model_config = ConfigDict(frozen=True)

    group: ModifierGroup
    option: ModifierOption
    normalized_name: str
    compact_name: str

    def matches(self, phrase: str, compact_phrase: str) -> bool:
        return (
            phrase == self.normalized_name
            or compact_phrase == self.compact_name
            or is_close_match(phrase, self.normalized_name)
            or is_close_match(compact_phrase, self.compact_name)
        )


class ModifierMatch(BaseModel):
    """Modifiers resolved for an item plus the tokens nothing claimed."""

    matched: List[MatchedModifier] = []
    unmatched_tokens: List[str] = []


def build_candidates(item: MenuItem) -> List[ModifierCandidate]:
    """Every option of every group on the item, in menu order."""
    candidates = []
    for group in item.modifiers:
        for option in group.options:
            normalized = normalize_option_name(option.name)
            candidates.append(
                ModifierCandidate(
                    group=group,
                    option=option,
                    normalized_name=normalized,
                    compact_name=normalized.replace(" ", ""),
                )
            )
    return candidates


def match_modifiers(tokens: List[str], item: MenuItem, max_window: int = 4) -> ModifierMatch:
    """
    Match leftover tokens against the item's modifier options.

    Windows of up to ``max_window`` tokens are tried longest first, left
    to right. A token belongs to at most one modifier. Single-select
    groups accept only their first matched option; multi-select groups
    accept any number (declared max_selections is not enforced here).

    Args:
        tokens: Tokens not consumed by the item match
        item: The matched menu item

    Returns:
        ModifierMatch with resolved selections and unclaimed tokens
    """
    if not tokens or not item.modifiers:
        return ModifierMatch(unmatched_tokens=list(tokens))

    candidates = build_candidates(item)
    matched: List[MatchedModifier] = []
    filled_groups: Set[str] = set()
    used: Set[int] = set()

    for length in range(min(len(tokens), max_window), 0, -1):
        for start in range(len(tokens) - length + 1):
            indices = range(start, start + length)
            if any(i in used for i in indices):
                continue
            window = tokens[start:start + length]
            phrase = " ".join(window)
            compact_phrase = "".join(window)

            for candidate in candidates:
                if not candidate.matches(phrase, compact_phrase):
                    continue
                if candidate.group.name in filled_groups and not candidate.group.multi_select:
                    continue
                matched.append(
                    MatchedModifier(
                        group_name=candidate.group.name,
                        option_name=candidate.option.name,
                        option_price=candidate.option.price,
                    )
                )
                filled_groups.add(candidate.group.name)
                used.update(indices)
                logger.debug(f"[MODIFIERS] '{phrase}' -> {candidate.group.name}: {candidate.option.name}")
                break

    unmatched = [token for i, token in enumerate(tokens) if i not in used]
    return ModifierMatch(matched=matched, unmatched_tokens=unmatched)


def over_selected_groups(item: MenuItem, matched: List[MatchedModifier]) -> List[str]:
    """Names of groups with more selections than they allow."""
    counts = {}
    for modifier in matched:
        counts[modifier.group_name] = counts.get(modifier.group_name, 0) + 1
    return [
        group.name
        for group in item.modifiers
        if counts.get(group.name, 0) > group.effective_max_selections
    ]
