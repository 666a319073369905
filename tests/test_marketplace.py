from concurrent.futures import ThreadPoolExecutor

import pytest

from errors import InsufficientCredits, NotFoundError, OutOfStock
from marketplace import list_equipment, list_purchases, purchase
from seed import DEFAULT_USER_ID
from users import create_user


def test_catalog_is_seeded(store):
    items = list_equipment(store)
    assert len(items) == 6
    assert items[0].credits_required == 1500


def test_purchase_debits_exactly_credits_required(store):
    purchase(store, DEFAULT_USER_ID, "equipment-1")
    assert store.users[DEFAULT_USER_ID].sustaina_credits == 2450 - 1500


def test_purchase_is_recorded(store):
    record = purchase(store, DEFAULT_USER_ID, "equipment-4")
    assert record.credits_used == 300
    assert str(record.purchase_price) == "8500.00"
    assert list_purchases(store, DEFAULT_USER_ID) == [record]


def test_insufficient_credits_leaves_balance(store):
    with pytest.raises(InsufficientCredits):
        purchase(store, DEFAULT_USER_ID, "equipment-2")
    assert store.users[DEFAULT_USER_ID].sustaina_credits == 2450
    assert list_purchases(store, DEFAULT_USER_ID) == []


def test_new_user_cannot_afford_anything(store):
    user = create_user(store, "broke", "broke@example.com", "Sam", "Rao")
    with pytest.raises(InsufficientCredits):
        purchase(store, user.id, "equipment-5")
    assert store.users[user.id].sustaina_credits == 0


def test_unknown_equipment(store):
    with pytest.raises(NotFoundError):
        purchase(store, DEFAULT_USER_ID, "equipment-99")


def test_stock_checked_before_credits(store):
    user = create_user(store, "broke", "broke@example.com", "Sam", "Rao")
    with pytest.raises(OutOfStock):
        purchase(store, user.id, "equipment-6")


def test_purchase_does_not_touch_stock(store):
    purchase(store, DEFAULT_USER_ID, "equipment-5")
    assert store.equipment["equipment-5"].in_stock is True


def test_concurrent_purchases_never_overdraw(store):
    def buy(_):
        try:
            purchase(store, DEFAULT_USER_ID, "equipment-5")
            return True
        except InsufficientCredits:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(buy, range(60)))

    assert results.count(True) == 2450 // 50
    assert store.users[DEFAULT_USER_ID].sustaina_credits == 0
    assert len(list_purchases(store, DEFAULT_USER_ID)) == 49
