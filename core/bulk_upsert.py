"""
Bulk Upsert Pipeline.

Fans a materialized sequence of documents out to a document store as
independent upserts, collects exactly one outcome per input record, and
reports aggregate counts and timing.

The pipeline owns no retry, throttling or batching. Admission control and
rate-limit retry belong to the store client. Locally, a bounded worker pool
caps the number of threads; within that cap every request is independent and
never waits on a sibling.

Outcome accounting:
    - Each input position contributes at most one outcome (keyed by position),
      so a record can be neither dropped nor double-counted.
    - A per-record failure becomes a Failed outcome and never aborts the batch.
    - Only an unusable store handle fails the whole call (SubmissionError),
      and only before anything was submitted.

Cancellation:
    Setting the caller's cancel_event stops the wait, cancels requests that
    have not started, and closes the collector. In-flight requests may still
    finish against the store but are not counted.

Exports:
    OutcomeCollector: Thread-safe outcome tally
    BulkUpsertPipeline: Worker-pool fan-out
    run_bulk: Convenience wrapper
    partition_key_from_field: Partition key extractor for a top-level field
"""

import threading
import time
import uuid
from collections.abc import Mapping
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from config.defaults import ImportDefaults
from core.models import BatchResult, Document, OutcomeStatus, UpsertOutcome
from exceptions import ContractViolationError, ItemWriteError, SubmissionError
from infrastructure.interface_repository import IDocumentStore, ParamNames
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.PIPELINE, "BulkUpsertPipeline")

PartitionKeyOf = Callable[[Document], Any]


def partition_key_from_field(field: str) -> PartitionKeyOf:
    """
    Build an extractor reading a top-level document field.

    A missing field raises KeyError, which the pipeline records as a Failed
    outcome for that record.
    """
    def _extract(document: Document) -> Any:
        return document[field]

    _extract.__name__ = f"partition_key_{field}"
    return _extract


# ============================================================================
# OUTCOME COLLECTOR
# ============================================================================

class OutcomeCollector:
    """
    Thread-safe tally of upsert outcomes.

    Workers add their own outcome. Once closed the collector rejects further
    contributions, so requests still running after a cancellation cannot
    change a result that has already been reported.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._outcomes: Dict[int, UpsertOutcome] = {}
        self._succeeded = 0
        self._failed = 0
        self._closed = False

    def add(self, position: int, outcome: UpsertOutcome) -> bool:
        """
        Record the outcome for an input position.

        Returns:
            False if the collector is closed or the position already resolved
        """
        with self._lock:
            if self._closed or position in self._outcomes:
                return False
            self._outcomes[position] = outcome
            if outcome.status == OutcomeStatus.SUCCEEDED:
                self._succeeded += 1
            else:
                self._failed += 1
            return True

    def has(self, position: int) -> bool:
        with self._lock:
            return position in self._outcomes

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def snapshot(self) -> Tuple[List[UpsertOutcome], int, int]:
        """Outcomes in input order plus succeeded/failed counts."""
        with self._lock:
            ordered = [self._outcomes[p] for p in sorted(self._outcomes)]
            return ordered, self._succeeded, self._failed


# ============================================================================
# PIPELINE
# ============================================================================

class BulkUpsertPipeline:
    """
    Bounded fan-out of document upserts against an IDocumentStore.

    Usage:
        pipeline = BulkUpsertPipeline(store, max_workers=100)
        result = pipeline.run(records, partition_key_from_field("year"))
        print(result.summary())
    """

    def __init__(
        self,
        store: IDocumentStore,
        max_workers: int = ImportDefaults.MAX_WORKERS,
        poll_interval: float = ImportDefaults.CANCEL_POLL_INTERVAL
    ):
        if max_workers < 1:
            raise ContractViolationError(f"max_workers must be >= 1, got {max_workers}")
        self.store = store
        self.max_workers = max_workers
        self.poll_interval = poll_interval

    def run(
        self,
        records: Sequence[Document],
        partition_key_of: PartitionKeyOf,
        cancel_event: Optional[threading.Event] = None
    ) -> BatchResult:
        """
        Upsert every record and wait for all outcomes.

        Args:
            records: Finite sequence of documents, order irrelevant
            partition_key_of: Extracts the partition key value from a record
            cancel_event: Set by the caller to abandon the wait

        Returns:
            BatchResult with one outcome per resolved record

        Raises:
            SubmissionError: Store handle invalid or unreachable (nothing submitted)
            ContractViolationError: partition_key_of is not callable
        """
        if not callable(partition_key_of):
            raise ContractViolationError(
                f"partition_key_of must be callable, got {type(partition_key_of).__name__}"
            )
        self._verify_store()

        records = list(records)
        submitted = len(records)
        batch_id = uuid.uuid4().hex[:12]
        collector = OutcomeCollector()

        logger.info(
            f"🚀 Submitting {submitted} upserts with up to {self.max_workers} workers",
            extra={'custom_dimensions': {
                'batch_id': batch_id,
                'submitted': submitted,
                'max_workers': self.max_workers,
            }}
        )

        start = time.perf_counter()
        cancelled = False

        if submitted:
            executor = ThreadPoolExecutor(
                max_workers=min(self.max_workers, submitted),
                thread_name_prefix=f"bulk-upsert-{batch_id}"
            )
            futures: Dict[Future, int] = {
                executor.submit(self._upsert_one, position, record, partition_key_of, collector, batch_id): position
                for position, record in enumerate(records)
            }
            try:
                cancelled = self._wait_for_outcomes(futures, cancel_event)
            except BaseException:
                # Caller abort (KeyboardInterrupt etc.) - stop outstanding work, keep tally intact
                self._abandon(executor, futures, collector)
                raise

            if cancelled:
                self._abandon(executor, futures, collector)
            else:
                executor.shutdown(wait=True)
                self._record_crashed_workers(futures, records, collector)
                collector.close()

        outcomes, succeeded, failed = collector.snapshot()
        elapsed = time.perf_counter() - start

        result = BatchResult(
            submitted=submitted,
            succeeded=succeeded,
            failed=failed,
            elapsed_seconds=elapsed,
            cancelled=cancelled,
            outcomes=outcomes
        )

        log = logger.warning if (failed or cancelled) else logger.info
        log(
            f"{'🛑 Cancelled' if cancelled else '✅ Completed'} batch: "
            f"{succeeded}/{submitted} succeeded, {failed} failed in {elapsed:.2f}s",
            extra={'custom_dimensions': dict(result.summary(), batch_id=batch_id)}
        )
        return result

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def _verify_store(self) -> None:
        if self.store is None or not hasattr(self.store, 'upsert_document'):
            raise SubmissionError("No usable document store handle")
        try:
            self.store.verify()
        except SubmissionError:
            raise
        except Exception as e:
            raise SubmissionError(f"Document store verification failed: {e}") from e

    def _wait_for_outcomes(
        self,
        futures: Dict[Future, int],
        cancel_event: Optional[threading.Event]
    ) -> bool:
        """Block until every future resolves. Returns True if cancelled first."""
        pending = set(futures)
        if cancel_event is None:
            wait(pending)
            return False

        while pending:
            if cancel_event.is_set():
                return True
            _, pending = wait(pending, timeout=self.poll_interval, return_when=FIRST_COMPLETED)
        return False

    @staticmethod
    def _abandon(executor: ThreadPoolExecutor, futures: Dict[Future, int], collector: OutcomeCollector) -> None:
        collector.close()
        for future in futures:
            future.cancel()
        executor.shutdown(wait=False, cancel_futures=True)

    @staticmethod
    def _record_crashed_workers(
        futures: Dict[Future, int],
        records: List[Document],
        collector: OutcomeCollector
    ) -> None:
        """A worker that raised never added its outcome; account for it here."""
        for future, position in futures.items():
            if collector.has(position):
                continue
            error = future.exception()
            collector.add(position, UpsertOutcome.failed(
                _record_id(records[position], position),
                f"Worker crashed: {error!r}"
            ))

    def _upsert_one(
        self,
        position: int,
        record: Document,
        partition_key_of: PartitionKeyOf,
        collector: OutcomeCollector,
        batch_id: str
    ) -> None:
        record_id = _record_id(record, position)
        outcome = self._attempt(record_id, record, partition_key_of)
        if not collector.add(position, outcome):
            logger.debug(
                f"Outcome for {record_id} arrived after the batch closed",
                extra={'custom_dimensions': {'batch_id': batch_id, 'record_id': record_id}}
            )
            return
        if not outcome.success:
            logger.debug(
                f"Upsert failed for {record_id}: {outcome.error}",
                extra={'custom_dimensions': {
                    'batch_id': batch_id,
                    'record_id': record_id,
                    'status_code': outcome.status_code,
                }}
            )

    def _attempt(self, record_id: str, record: Document, partition_key_of: PartitionKeyOf) -> UpsertOutcome:
        if not isinstance(record, Mapping):
            return UpsertOutcome.failed(record_id, f"Record is not a document: {type(record).__name__}")
        if record.get(ParamNames.ID) in (None, ""):
            return UpsertOutcome.failed(record_id, "Document has no id")

        try:
            partition_key = partition_key_of(record)
        except Exception as e:
            return UpsertOutcome.failed(record_id, f"Partition key unavailable: {type(e).__name__}: {e}")
        if partition_key is None:
            return UpsertOutcome.failed(record_id, "Partition key value is null")

        try:
            self.store.upsert_document(record, partition_key)
        except ItemWriteError as e:
            return UpsertOutcome.failed(record_id, str(e), e.status_code)
        except Exception as e:
            return UpsertOutcome.failed(record_id, f"{type(e).__name__}: {e}")
        return UpsertOutcome.succeeded(record_id)


def _record_id(record: Any, position: int) -> str:
    """Record id, or the input position for records that carry none."""
    if isinstance(record, Mapping):
        value = record.get(ParamNames.ID)
        if value not in (None, ""):
            return str(value)
    return f"#{position}"


def run_bulk(
    records: Sequence[Document],
    partition_key_of: PartitionKeyOf,
    store: IDocumentStore,
    max_workers: int = ImportDefaults.MAX_WORKERS,
    cancel_event: Optional[threading.Event] = None
) -> BatchResult:
    """
    Upsert every record into store and return the aggregate result.

    See BulkUpsertPipeline.run.
    """
    return BulkUpsertPipeline(store, max_workers=max_workers).run(
        records, partition_key_of, cancel_event=cancel_event
    )


__all__ = [
    'OutcomeCollector',
    'BulkUpsertPipeline',
    'run_bulk',
    'partition_key_from_field',
    'PartitionKeyOf',
]
