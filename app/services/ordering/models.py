"""Order matching result models."""
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.services.menu.base import Money


class ResultModel(BaseModel):
    """Base for results; serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParseErrorCode(str, Enum):
    """Why a parse did not produce a match."""

    INDEX_UNAVAILABLE = "index_unavailable"
    EMPTY_UTTERANCE = "empty_utterance"
    NO_MATCH = "no_match"
    WEAK_MATCH = "weak_match"


class MatchedModifier(ResultModel):
    """A resolved modifier selection."""

    group_name: str
    option_name: str
    option_price: Money = Decimal("0")


class RequiredOption(ResultModel):
    """Option offered for an unresolved required group."""

    name: str
    price: Money = Decimal("0")
    is_default: bool = False


class RequiredModifierGroup(ResultModel):
    """A required group the caller still has to choose from."""

    group_name: str
    required: bool = True
    options: List[RequiredOption] = []


class MatchedItem(ResultModel):
    """Summary of the matched menu item."""

    name: str
    price: Money
    category: str = ""
    description: str = ""


class OrderMatch(ResultModel):
    """The best interpretation of an utterance."""

    item: MatchedItem
    confidence: float
    matched_modifiers: List[MatchedModifier] = []
    remaining_required_modifiers: List[RequiredModifierGroup] = []
    calculated_price: Money
    unmatched_tokens: List[str] = []


class AlternativeMatch(ResultModel):
    """Another item the caller may have meant."""

    name: str
    confidence: float
    category: str = ""


class ParseResult(ResultModel):
    """Outcome of parsing one utterance against one menu snapshot."""

    success: bool
    match: Optional[OrderMatch] = None
    alternative_matches: List[AlternativeMatch] = []
    error: Optional[str] = None
    error_code: Optional[ParseErrorCode] = None
