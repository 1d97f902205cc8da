"""
botkeeper/models/state.py

Purpose: Trading view of the per-user state document

- Recognized bot lists (active / completed)
- Any other keys are kept untouched
- Loose bot id comparison

The stored state stays an opaque mapping; it is only parsed into
TradingState by the bot operations.
"""

import re
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Decimal literal as accepted when text is compared against a number
NUMERIC_TEXT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


class TradingBot(BaseModel):
    """
    A tracked trading bot. Only ``id`` is interpreted, and it is stored
    exactly as given; every other field is passed through.
    """
    model_config = ConfigDict(extra="allow")

    id: Any = None


class TradingState(BaseModel):
    """
    Per-user state. ``activeTradingBots`` and ``completedTradingBots`` are
    typed; unrecognized keys pass through unchanged.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    active_trading_bots: Optional[List[TradingBot]] = Field(default=None, alias="activeTradingBots")
    completed_trading_bots: Optional[List[TradingBot]] = Field(default=None, alias="completedTradingBots")

    def to_document(self) -> dict:
        """Serialize back to the stored JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


def _is_number(value: Any) -> bool:
    return isinstance(value, (bool, int, float))


def _as_number(value: Any) -> Optional[float]:
    """Numeric value of a bot id, or None when it has none."""
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if NUMERIC_TEXT.match(text):
            return float(text)
    return None


def bot_ids_match(left: Any, right: Any) -> bool:
    """
    Compare two bot ids.

    When either side is a number (or bool) both sides are compared
    numerically, so ``1``, ``1.0`` and ``"1"`` match. Two strings match
    only when they are identical: ``"01"`` and ``"1"`` are different bots.
    A missing id never matches.
    """
    if left is None or right is None:
        return False
    if _is_number(left) or _is_number(right):
        left_number, right_number = _as_number(left), _as_number(right)
        return left_number is not None and left_number == right_number
    return left == right


def find_bot_index(bots: List[TradingBot], bot_id: Any) -> Optional[int]:
    """
    Position of the first bot whose id matches ``bot_id``, or None.
    """
    for index, bot in enumerate(bots):
        if bot_ids_match(bot.id, bot_id):
            return index
    return None
