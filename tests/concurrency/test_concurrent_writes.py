"""Concurrency tests for the in-memory potion store.

Sync endpoints run in FastAPI's threadpool, so several requests can write
to the same repository at once. A very short switch interval makes the
interpreter interleave threads aggressively.
"""

import sys
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from potion_shop.domain.models import DeliveryMethod, PaymentMethod, Potion
from potion_shop.repositories.potion_repository import PotionRepository

ORDER_DATE = datetime(2026, 3, 14, 9, 0, tzinfo=timezone.utc)
WORKERS = 8
PER_WORKER = 200


def make_potion(potion_id: str) -> Potion:
    return Potion.create(
        id=potion_id,
        potion_number="POT-2026-0001",
        ordered_by="Baba Yaga",
        order_date=ORDER_DATE,
        ready_date=ORDER_DATE + timedelta(days=1),
        delivery_address="Hut on chicken legs, Deep Forest",
        delivery_method=DeliveryMethod.OWL,
        payment_method=PaymentMethod.GOLD_COINS,
        ingredients=[],
    )


@pytest.fixture(autouse=True)
def fast_thread_switching():
    interval = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    try:
        yield
    finally:
        sys.setswitchinterval(interval)


def test_concurrent_adds_keep_every_order():
    """
    Setup: Empty repository
    Action: 8 threads each add 200 potions
    Expected: All 1600 potions stored, none lost
    """
    repository = PotionRepository()

    def add_batch(worker: int) -> None:
        for n in range(PER_WORKER):
            repository.add(make_potion(f"pot-{worker}-{n}"))

    with ThreadPoolExecutor(max_workers=WORKERS) as executor:
        list(executor.map(add_batch, range(WORKERS)))

    stored_ids = {p.id for p in repository.list_all()}
    assert repository.count() == WORKERS * PER_WORKER
    assert len(stored_ids) == WORKERS * PER_WORKER
    assert stored_ids == {
        f"pot-{worker}-{n}" for worker in range(WORKERS) for n in range(PER_WORKER)
    }


def test_concurrent_adds_and_deletes_stay_consistent():
    """
    Setup: Repository pre-filled with 800 potions
    Action: 4 threads delete the pre-filled potions while 4 threads add new ones
    Expected: Exactly the newly added potions remain, count matches the list
    """
    repository = PotionRepository()
    half = WORKERS // 2
    for worker in range(half):
        for n in range(PER_WORKER):
            repository.add(make_potion(f"old-{worker}-{n}"))

    def delete_batch(worker: int) -> None:
        for n in range(PER_WORKER):
            repository.delete(f"old-{worker}-{n}")

    def add_batch(worker: int) -> None:
        for n in range(PER_WORKER):
            repository.add(make_potion(f"new-{worker}-{n}"))

    with ThreadPoolExecutor(max_workers=WORKERS) as executor:
        futures = [executor.submit(delete_batch, w) for w in range(half)]
        futures += [executor.submit(add_batch, w) for w in range(half)]
        for future in futures:
            future.result()

    remaining = repository.list_all()
    assert repository.count() == len(remaining) == half * PER_WORKER
    assert all(p.id.startswith("new-") for p in remaining)
