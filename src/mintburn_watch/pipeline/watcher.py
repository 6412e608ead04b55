"""The mint/burn pipeline: one pass per new chain head."""

from __future__ import annotations

import logging

from eth_utils import to_checksum_address

from mintburn_watch.chain.metadata import TokenMetadataResolver
from mintburn_watch.errors import DecodeError, DispatchError, WatchError
from mintburn_watch.interfaces.fetcher import LogFetcher
from mintburn_watch.interfaces.notifier import Notifier
from mintburn_watch.models.events import (
    PLACEHOLDER_META,
    Classification,
    LogEntry,
    TokenMeta,
)
from mintburn_watch.models.records import PassResult
from mintburn_watch.notify.format import build_message
from mintburn_watch.pipeline.classifier import classify, decode_transfer
from mintburn_watch.pipeline.cursor import BlockCursor
from mintburn_watch.pipeline.dedup import Deduplicator
from mintburn_watch.pipeline.gate import ConfirmationGate

log = logging.getLogger(__name__)


class MintBurnWatcher:
    """Owns all mutable pipeline state for one run.

    Per new head:
        cursor range -> fetch logs -> for each log:
        confirmation gate -> dedup check -> decode/classify ->
        token metadata -> notify -> dedup record

    A fetch failure aborts the pass and leaves the cursor where it was.
    Logs still awaiting confirmations hold the cursor just below their
    block so the next range fetches them again. Decode and dispatch
    failures skip only the affected log.
    """

    def __init__(
        self,
        fetcher: LogFetcher,
        notifier: Notifier,
        metadata: TokenMetadataResolver,
        gate: ConfirmationGate,
        dedup: Deduplicator | None = None,
        cursor: BlockCursor | None = None,
        network_name: str = "Base",
        explorer_url: str = "https://basescan.org",
    ) -> None:
        self.fetcher = fetcher
        self.notifier = notifier
        self.metadata = metadata
        self.gate = gate
        self.dedup = dedup or Deduplicator()
        self.cursor = cursor or BlockCursor()
        self._network_name = network_name
        self._explorer_url = explorer_url

    async def on_block(self, head: int) -> PassResult | None:
        """Run one pass for a new head. Never raises.

        Returns the pass result, or None if the pass was aborted.
        """
        try:
            return await self.process_head(head)
        except Exception as exc:
            log.error("Pass for block %d failed, cursor stays at %s: %s",
                      head, self.cursor.last_processed, exc, exc_info=True)
            return None

    async def process_head(self, head: int) -> PassResult:
        """Process the range implied by ``head``.

        Raises TransportError if the logs cannot be fetched; the cursor is
        not advanced in that case.
        """
        block_range = self.cursor.next_range(head)
        result = PassResult(block_range=block_range)
        if block_range is None:
            log.debug("Head %d already processed (cursor %s)", head, self.cursor.last_processed)
            return result

        logs = await self.fetcher.fetch(block_range.start, block_range.end)
        result.fetched = len(logs)
        self.gate.reset()

        lowest_deferred: int | None = None
        for entry in logs:
            if not await self.gate.is_eligible(entry.block_number):
                result.deferred += 1
                if lowest_deferred is None or entry.block_number < lowest_deferred:
                    lowest_deferred = entry.block_number
                continue
            outcome = await self.handle_log(entry)
            if outcome == "notified":
                result.notified += 1
            elif outcome == "duplicate":
                result.duplicates += 1
            elif outcome == "ignored":
                result.ignored += 1
            else:
                result.failed += 1

        advance_to = block_range.end
        if lowest_deferred is not None:
            advance_to = min(advance_to, lowest_deferred - 1)
        self.cursor.advance(advance_to)
        result.advanced_to = self.cursor.last_processed

        if result.fetched:
            log.info(
                "Blocks %d..%d: %d logs, %d notified, %d deferred, %d duplicate, %d failed",
                block_range.start, block_range.end, result.fetched, result.notified,
                result.deferred, result.duplicates, result.failed,
            )
        return result

    async def handle_log(self, entry: LogEntry) -> str:
        """Handle one eligible log. Never raises.

        Returns one of "notified", "duplicate", "ignored", "failed".
        """
        try:
            if self.dedup.seen(entry.transaction_hash):
                return "duplicate"

            try:
                event = decode_transfer(entry)
            except DecodeError as exc:
                log.warning("Skipping undecodable log at block %d: %s", entry.block_number, exc)
                return "failed"

            kind = classify(event)
            if kind == Classification.IGNORED:
                return "ignored"

            token_address = to_checksum_address(entry.address)
            meta = await self._token_meta(token_address)

            text = build_message(
                kind,
                meta,
                token_address=token_address,
                sender=event.sender,
                recipient=event.recipient,
                amount=event.amount,
                tx_hash=entry.transaction_hash,
                block_number=entry.block_number,
                network_name=self._network_name,
                explorer_url=self._explorer_url,
            )

            try:
                await self.notifier.send(text)
            except DispatchError as exc:
                log.error("Failed to notify %s %s: %s", kind.value, entry.transaction_hash, exc)
                return "failed"

            self.dedup.record(entry.transaction_hash)
            log.info(
                "%s %s %s at block %d (tx %s)",
                kind.value.capitalize(), event.amount, meta.symbol,
                entry.block_number, entry.transaction_hash,
            )
            return "notified"

        except Exception as exc:
            log.error("Error handling log tx=%s: %s", entry.transaction_hash, exc, exc_info=True)
            return "failed"

    async def _token_meta(self, token_address: str) -> TokenMeta:
        try:
            return await self.metadata.resolve(token_address)
        except WatchError as exc:
            log.warning("Failed fetching token meta for %s: %s", token_address, exc)
            return PLACEHOLDER_META
