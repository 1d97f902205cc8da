"""
botkeeper/api/bots.py

Purpose: State and trading bot endpoints

- PUT  /users/{email}/updateState      replace state
- POST /users/{email}/addActiveBot     append an active bot
- PUT  /users/{email}/moveBot/{bot_id} move a bot to completed
"""

from typing import Any, Dict

from fastapi import APIRouter, Body

from botkeeper.models.state import TradingBot
from botkeeper.services import bot_service
from botkeeper.utils import constants

router = APIRouter(prefix="/users")


@router.put("/{email}/updateState")
def update_state(email: str, state: Dict[str, Any] = Body(...)):
    """Replace the user's state with the request body (any JSON object)."""
    new_state = bot_service.replace_state(email, state)
    return {"message": constants.STATE_UPDATED, "state": new_state}


@router.post("/{email}/addActiveBot")
def add_active_bot(email: str, bot: TradingBot):
    """
    Append the request body to activeTradingBots.

    Raises:
        400: A bot with the same id is already tracked
        400: Stored bot lists are malformed
        404: User not found
    """
    added = bot_service.add_active_bot(email, bot)
    return {"message": constants.BOT_ADDED, "bot": added.model_dump(mode="json", exclude_unset=True)}


@router.put("/{email}/moveBot/{bot_id}")
def move_bot(email: str, bot_id: str):
    """
    Move an active bot to completedTradingBots.

    Raises:
        400: Stored bot lists are malformed
        404: User not found, or no active bot with that id
    """
    moved = bot_service.move_bot_to_completed(email, bot_id)
    return {"message": constants.BOT_MOVED, "movedBot": moved.model_dump(mode="json", exclude_unset=True)}
