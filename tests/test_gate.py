"""Confirmation gate eligibility."""

from __future__ import annotations

from mintburn_watch.pipeline.gate import ConfirmationGate

from tests.mocks import MockChain


async def test_single_confirmation_skips_head_query():
    chain = MockChain(head=0)
    gate = ConfirmationGate(chain, confirmations=1)
    assert await gate.is_eligible(100)
    assert chain.head_calls == 0


async def test_three_confirmations_need_head_two_above():
    """C=3, log at 100: head 101 → not eligible, head 102 → eligible."""
    chain = MockChain(head=101)
    gate = ConfirmationGate(chain, confirmations=3)
    assert not await gate.is_eligible(100)

    chain.head = 102
    gate.reset()
    assert await gate.is_eligible(100)


async def test_head_queried_once_per_pass():
    chain = MockChain(head=200)
    gate = ConfirmationGate(chain, confirmations=2)
    for block in (150, 160, 170):
        assert await gate.is_eligible(block)
    assert chain.head_calls == 1


async def test_head_failure_defers():
    chain = MockChain(head=500)
    chain.head_failures = 1
    gate = ConfirmationGate(chain, confirmations=2)
    assert not await gate.is_eligible(100)
    # Failure holds for the rest of the pass
    assert not await gate.is_eligible(100)

    gate.reset()
    assert await gate.is_eligible(100)
