"""Bounded transaction-hash deduplicator."""

from __future__ import annotations

from mintburn_watch.pipeline.dedup import Deduplicator

from tests.factories import tx_hash


def test_record_is_idempotent():
    dedup = Deduplicator()
    dedup.record("0xabc")
    dedup.record("0xabc")
    assert len(dedup) == 1
    assert dedup.seen("0xabc")


def test_seen_is_case_insensitive():
    dedup = Deduplicator()
    dedup.record("0xABCDEF")
    assert dedup.seen("0xabcdef")
    assert "0xAbCdEf" in dedup


def test_bound_evicts_oldest_two_hundred():
    """1001 inserts → size ≤ 1000 and the 200 earliest are gone."""
    dedup = Deduplicator(capacity=1000, evict=200)
    hashes = [tx_hash(i) for i in range(1001)]
    for h in hashes:
        dedup.record(h)

    assert len(dedup) <= 1000
    assert len(dedup) == 801
    assert not any(dedup.seen(h) for h in hashes[:200])
    assert all(dedup.seen(h) for h in hashes[200:])


def test_no_eviction_at_capacity():
    dedup = Deduplicator(capacity=1000, evict=200)
    for i in range(1000):
        dedup.record(tx_hash(i))
    assert len(dedup) == 1000
    assert dedup.seen(tx_hash(0))
