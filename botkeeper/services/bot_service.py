"""
botkeeper/services/bot_service.py

Purpose: Per-user state and trading bot lifecycle

- Wholesale state replacement
- Appending bots to activeTradingBots
- Moving a bot from active to completed
"""

from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from botkeeper.core.exceptions import ConflictError, NotFoundError, ValidationError
from botkeeper.core.logging import get_logger, LogContext
from botkeeper.db.store import get_store
from botkeeper.models.state import TradingBot, TradingState, find_bot_index
from botkeeper.models.user import UserRecord
from botkeeper.utils import constants

logger = get_logger(__name__)


def _trading_state(user: UserRecord) -> TradingState:
    """
    Parses the user's stored state for a bot operation.

    Raises:
        ValidationError: The state or its bot lists have an unexpected shape
    """
    if not isinstance(user.state, dict):
        logger.warning("Stored state is not a mapping")
        raise ValidationError(constants.MALFORMED_STATE)
    try:
        return TradingState.model_validate(user.state)
    except PydanticValidationError as e:
        logger.warning("Stored bot lists do not parse")
        raise ValidationError(
            constants.MALFORMED_STATE,
            details=e.errors(include_url=False, include_context=False)
        ) from e


def replace_state(email: str, state: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replaces the user's state document. No merge with the old state.

    Raises:
        NotFoundError: No record with that email
    """
    with LogContext(email=email, operation="replace_state"):
        store = get_store()
        with store.transaction() as records:
            index = store.find(records, email)
            if index is None:
                raise NotFoundError(constants.USER_NOT_FOUND)
            records[index].state = state

        logger.info("State replaced")
        return state


def add_active_bot(email: str, bot: TradingBot) -> TradingBot:
    """
    Appends a bot to the user's activeTradingBots, creating the list if needed.

    Raises:
        NotFoundError: No record with that email
        ConflictError: A bot with the same id is already tracked
        ValidationError: The stored bot lists are malformed
    """
    with LogContext(email=email, bot_id=bot.id, operation="add_bot"):
        store = get_store()
        with store.transaction() as records:
            index = store.find(records, email)
            if index is None:
                raise NotFoundError(constants.USER_NOT_FOUND)

            state = _trading_state(records[index])
            active = list(state.active_trading_bots or [])
            completed = state.completed_trading_bots or []

            if find_bot_index(active, bot.id) is not None or find_bot_index(completed, bot.id) is not None:
                logger.warning("Bot rejected, id already tracked")
                raise ConflictError(constants.BOT_EXISTS)

            active.append(bot)
            state.active_trading_bots = active
            records[index].state = state.to_document()

        logger.info("Active bot added")
        return bot


def move_bot_to_completed(email: str, bot_id: Any) -> TradingBot:
    """
    Transfers a bot from activeTradingBots to the end of completedTradingBots.

    ``bot_id`` is matched with bot_ids_match, so "1" finds a bot with id 1.
    The remaining active bots keep their order.

    Raises:
        NotFoundError: No record with that email, or no active bot with that id
        ValidationError: The stored bot lists are malformed
    """
    with LogContext(email=email, bot_id=bot_id, operation="move_bot"):
        store = get_store()
        with store.transaction() as records:
            index = store.find(records, email)
            if index is None:
                raise NotFoundError(constants.USER_NOT_FOUND)

            state = _trading_state(records[index])
            active = list(state.active_trading_bots or [])
            completed = list(state.completed_trading_bots or [])

            position = find_bot_index(active, bot_id)
            if position is None:
                logger.info("Move rejected, no such active bot")
                raise NotFoundError(constants.ACTIVE_BOT_NOT_FOUND)

            bot = active.pop(position)
            completed.append(bot)

            state.active_trading_bots = active
            state.completed_trading_bots = completed
            records[index].state = state.to_document()

        logger.info("Bot moved to completed")
        return bot
