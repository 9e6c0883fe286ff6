"""
Data Import Service - Dataset loading and bulk import.

Reads a JSON array of meteorite-landing records, validates each one against
the permissive SpatialRecord model, and hands the documents to the bulk
upsert pipeline.

Loading fails fast: a bad file raises DataImportError before anything is
written. Individual write failures are reported in the BatchResult.

Exports:
    load_records: Read and validate the dataset file
    import_records: Run the bulk upsert pipeline for a set of documents
"""

import json
import threading
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from config import CosmosConfig, ImportConfig
from core.bulk_upsert import BulkUpsertPipeline, partition_key_from_field
from core.models import BatchResult, Document, SpatialRecord
from exceptions import DataImportError
from infrastructure.interface_repository import IDocumentStore
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "DataImportService")


def load_records(file_path: Union[str, Path]) -> List[Document]:
    """
    Load the dataset file.

    Args:
        file_path: Path to a JSON array of objects

    Returns:
        Validated documents as plain dicts, in file order

    Raises:
        DataImportError: File missing/unreadable, not a JSON array, or a record
            fails validation (the error names its position and id)
    """
    path = Path(file_path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except FileNotFoundError as e:
        raise DataImportError(f"Dataset file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise DataImportError(f"Dataset file is not valid JSON: {path} ({e})") from e
    except OSError as e:
        raise DataImportError(f"Dataset file unreadable: {path} ({e})") from e

    if not isinstance(payload, list):
        raise DataImportError(
            f"Dataset must be a JSON array of records, got {type(payload).__name__}"
        )

    documents: List[Document] = []
    for position, raw in enumerate(payload):
        if not isinstance(raw, dict):
            raise DataImportError(f"Record #{position} is not an object: {type(raw).__name__}")
        try:
            record = SpatialRecord.model_validate(raw)
        except ValidationError as e:
            raise DataImportError(
                f"Record #{position} (id={raw.get('id')!r}) failed validation: "
                f"{e.error_count()} error(s), first: {e.errors()[0]['msg']}"
            ) from e
        documents.append(record.to_document())

    logger.info(
        f"📄 Loaded {len(documents)} records from {path}",
        extra={'custom_dimensions': {'file_path': str(path), 'record_count': len(documents)}}
    )
    return documents


def import_records(
    documents: List[Document],
    store: IDocumentStore,
    cosmos_config: CosmosConfig,
    import_config: ImportConfig,
    cancel_event: Optional[threading.Event] = None
) -> BatchResult:
    """
    Bulk upsert documents, routed by the container's partition key field.

    Returns:
        BatchResult from the pipeline

    Raises:
        SubmissionError: Store unusable before submission
    """
    pipeline = BulkUpsertPipeline(
        store,
        max_workers=import_config.max_workers,
        poll_interval=import_config.cancel_poll_interval
    )
    result = pipeline.run(
        documents,
        partition_key_from_field(cosmos_config.partition_key_field),
        cancel_event=cancel_event
    )

    for failure in result.failures[:10]:
        logger.warning(f"Record {failure.record_id} not imported: {failure.error}")
    if len(result.failures) > 10:
        logger.warning(f"... and {len(result.failures) - 10} more failed records")

    return result


__all__ = ['load_records', 'import_records']
