"""
tests/test_economy.py
---------------------

Economy operations against a real store: every check below reads the
committed document back, so it covers persistence as well as the logic.
"""

import pytest

from wegrow_node.errors import (
    InsufficientBalance,
    QuestNotFound,
    RewardNotFound,
    StorageFailure,
    UserNotFound,
)
from wegrow_node.wegrow_runtime import atomic_store
from wegrow_node.wegrow_runtime.economy import Economy
from wegrow_node.wegrow_runtime.users import find_user


def _listing(owner_id, name="Monstera"):
    return {"id": f"l-{name}", "ownerId": owner_id, "plantName": name, "type": "Have"}


def _points(store, user_id):
    return find_user(store.load(), user_id)["points"]


def _give_points(store, user_id, amount):
    def _apply(doc):
        find_user(doc, user_id)["points"] = amount

    store.transact(_apply)


def test_listing_awards_ten_points_and_prepends(economy, store, user):
    economy.record_listing_created(user["id"], _listing(user["id"], "Fern"))
    economy.record_listing_created(user["id"], _listing(user["id"], "Pothos"))

    doc = store.load()
    assert [l["plantName"] for l in doc["listings"]] == ["Pothos", "Fern"]
    assert _points(store, user["id"]) == 20


def test_listing_for_unknown_user_stores_nothing(economy, store):
    with pytest.raises(UserNotFound):
        economy.record_listing_created("nobody", _listing("nobody"))
    assert store.load()["listings"] == []


def test_listing_points_are_configurable(store, user):
    Economy(store, listing_points=3).record_listing_created(user["id"], _listing(user["id"]))
    assert _points(store, user["id"]) == 3


def test_complete_quest_awards_points_and_badge(economy, user):
    result = economy.complete_quest(user["id"], "q1")
    assert result == {"points": 50, "badges": ["q1"]}


def test_repeat_completion_keeps_single_badge_but_repeats_points(economy, user):
    economy.complete_quest(user["id"], "q1")
    result = economy.complete_quest(user["id"], "q1")
    assert result["badges"] == ["q1"]
    assert result["points"] == 100


def test_repeat_completion_without_repeat_points(store, user):
    economy = Economy(store, repeat_quest_points=False)
    economy.complete_quest(user["id"], "q1")
    result = economy.complete_quest(user["id"], "q1")
    assert result == {"points": 50, "badges": ["q1"]}


def test_unknown_quest_changes_nothing(economy, store, user):
    with pytest.raises(QuestNotFound):
        economy.complete_quest(user["id"], "q-missing")
    assert _points(store, user["id"]) == 0
    assert find_user(store.load(), user["id"])["badges"] == []


def test_complete_quest_unknown_user(economy):
    with pytest.raises(UserNotFound):
        economy.complete_quest("nobody", "q1")


def test_redeem_debits_and_logs_one_transaction(economy, store, user):
    _give_points(store, user["id"], 45)

    result = economy.redeem_reward(user["id"], "r1")
    assert result["remainingPoints"] == 15

    txs = store.load()["transactions"]
    assert len(txs) == 1
    tx = txs[0]
    assert tx["userId"] == user["id"]
    assert tx["itemId"] == "r1"
    assert tx["pointsSpent"] == 30
    assert tx["cashAmount"] == 0
    assert isinstance(tx["date"], int)
    assert result["transaction"] == tx


def test_redeem_insufficient_leaves_balance_and_log(economy, store, user):
    _give_points(store, user["id"], 29)

    with pytest.raises(InsufficientBalance):
        economy.redeem_reward(user["id"], "r1")

    assert _points(store, user["id"]) == 29
    assert store.load()["transactions"] == []


def test_redeem_unknown_reward(economy, store, user):
    _give_points(store, user["id"], 100)
    with pytest.raises(RewardNotFound):
        economy.redeem_reward(user["id"], "r-missing")
    assert _points(store, user["id"]) == 100


def test_redeem_unknown_user(economy):
    with pytest.raises(UserNotFound):
        economy.redeem_reward("nobody", "r1")


def test_redeem_storage_failure_is_all_or_nothing(economy, store, user, monkeypatch):
    _give_points(store, user["id"], 60)

    def _broken_write(path, data):
        raise OSError("read-only filesystem")

    monkeypatch.setattr(atomic_store, "atomic_write_bytes", _broken_write)
    with pytest.raises(StorageFailure):
        economy.redeem_reward(user["id"], "r1")
    monkeypatch.undo()

    assert _points(store, user["id"]) == 60
    assert store.load()["transactions"] == []


def test_transactions_for_user_in_date_order(economy, store, user, market):
    other = market.signup("b@x.com")["user"]
    _give_points(store, user["id"], 100)
    _give_points(store, other["id"], 100)

    economy.redeem_reward(user["id"], "r1")
    economy.redeem_reward(other["id"], "r1")
    economy.redeem_reward(user["id"], "r1")

    mine = economy.transactions_for(user["id"])
    assert len(mine) == 2
    assert all(t["userId"] == user["id"] for t in mine)
    assert mine[0]["date"] <= mine[1]["date"]


def test_points_economy_scenario(economy, market, store):
    user = market.signup("scenario@x.com")["user"]
    assert user["points"] == 0

    market.create_listing(user, {"plantName": "Basil", "type": "Have"})
    assert _points(store, user["id"]) == 10

    assert economy.complete_quest(user["id"], "q1") == {"points": 60, "badges": ["q1"]}

    assert economy.redeem_reward(user["id"], "r1")["remainingPoints"] == 30
    assert economy.redeem_reward(user["id"], "r1")["remainingPoints"] == 0

    with pytest.raises(InsufficientBalance):
        economy.redeem_reward(user["id"], "r1")

    assert _points(store, user["id"]) == 0
    assert [t["pointsSpent"] for t in economy.transactions_for(user["id"])] == [30, 30]
