"""
wegrow_node/wegrow_runtime/economy.py
-------------------------------------

The three operations that move points:

    record_listing_created(user_id, listing)
        -> listing stored + listing_points credited

    complete_quest(user_id, quest_id)
        -> badge awarded (once) + quest points credited

    redeem_reward(user_id, reward_id)
        -> reward cost debited + transaction appended

Each call is exactly one ``AtomicDocumentStore.transact``. Every lookup and
balance check happens on the working copy of that transaction, so a failed
check aborts with nothing written and two concurrent calls can never both
act on the same stale balance.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict

from ..errors import QuestNotFound, RewardNotFound
from . import catalog, ledger, transactions
from .atomic_store import AtomicDocumentStore
from .users import require_user

log = logging.getLogger(__name__)

LISTING_POINTS = 10


class Economy:
    """
    Points economy bound to one document store.

    ``repeat_quest_points`` keeps the historical behavior where completing a
    quest again credits its points again (the badge is still awarded once).
    Set it to False to credit quest points only together with a new badge.
    """

    def __init__(
        self,
        store: AtomicDocumentStore,
        *,
        listing_points: int = LISTING_POINTS,
        repeat_quest_points: bool = True,
    ) -> None:
        if listing_points < 0:
            raise ValueError("listing_points must be non-negative")
        self.store = store
        self.listing_points = int(listing_points)
        self.repeat_quest_points = bool(repeat_quest_points)

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def record_listing_created(self, user_id: str, listing: Dict[str, Any]) -> Dict[str, Any]:
        """Store ``listing`` (newest first) and credit the owner."""

        def _apply(doc: Dict[str, Any]) -> Dict[str, Any]:
            user = require_user(doc, user_id)
            stored = copy.deepcopy(listing)
            doc["listings"].insert(0, stored)
            balance = ledger.award_points(user, self.listing_points)
            log.info("listing %s by %s: +%d points (balance=%d)", stored.get("id"), user_id, self.listing_points, balance)
            return stored

        return self.store.transact(_apply)

    # ------------------------------------------------------------------
    # Quests
    # ------------------------------------------------------------------

    def complete_quest(self, user_id: str, quest_id: str) -> Dict[str, Any]:
        def _apply(doc: Dict[str, Any]) -> Dict[str, Any]:
            user = require_user(doc, user_id)
            quest = catalog.get_quest(doc, quest_id)
            if quest is None:
                raise QuestNotFound()

            first_time = ledger.award_badge(user, quest["id"])
            award = int(quest.get("points") or 0)
            if first_time or self.repeat_quest_points:
                ledger.award_points(user, award)
            else:
                award = 0

            log.info("quest %s by %s: +%d points, new_badge=%s", quest_id, user_id, award, first_time)
            return {
                "points": ledger.points_of(user),
                "badges": list(ledger.badges_of(user)),
            }

        return self.store.transact(_apply)

    # ------------------------------------------------------------------
    # Rewards
    # ------------------------------------------------------------------

    def redeem_reward(self, user_id: str, reward_id: str) -> Dict[str, Any]:
        """
        Debit the reward cost and log the redemption.

        InsufficientBalance propagates out of the transaction body, so the
        balance and the transaction log stay exactly as they were.
        """

        def _apply(doc: Dict[str, Any]) -> Dict[str, Any]:
            user = require_user(doc, user_id)
            reward = catalog.get_reward(doc, reward_id)
            if reward is None:
                raise RewardNotFound()

            cost = int(reward.get("pointsCost") or 0)
            remaining = ledger.debit_points(user, cost)
            record = transactions.append(doc, transactions.new_transaction(user["id"], reward["id"], cost))

            log.info("reward %s redeemed by %s: -%d points (balance=%d)", reward_id, user_id, cost, remaining)
            return {"remainingPoints": remaining, "transaction": record}

        return self.store.transact(_apply)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def transactions_for(self, user_id: str) -> list:
        doc = self.store.load()
        require_user(doc, user_id)
        return transactions.list_for_user(doc, user_id)
