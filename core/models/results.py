"""
Execution Result Data Models.

Represents results of bulk imports, queries and provisioning.
No business logic - pure data structures.

Exports:
    UpsertOutcome: Terminal result of one document write
    BatchResult: Aggregate of one bulk upsert run
    QueryResult: Items and cost of one spatial query
    SetupReport: Result of resource provisioning plus import
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import OutcomeStatus


class UpsertOutcome(BaseModel):
    """
    Terminal result of a single upsert.

    Succeeded(record_id) or Failed(record_id, error).
    """

    model_config = ConfigDict(frozen=True)

    record_id: str = Field(..., description="Record id, or input position when the record has none")
    status: OutcomeStatus = Field(..., description="Terminal status")
    error: Optional[str] = Field(default=None, description="Underlying error description if failed")
    status_code: Optional[int] = Field(default=None, description="Store status code if the store returned one")

    @model_validator(mode='after')
    def validate_error_presence(self):
        if self.status == OutcomeStatus.FAILED and not self.error:
            raise ValueError("Failed outcome requires an error description")
        if self.status == OutcomeStatus.SUCCEEDED and self.error:
            raise ValueError("Succeeded outcome cannot carry an error")
        return self

    @classmethod
    def succeeded(cls, record_id: str) -> "UpsertOutcome":
        return cls(record_id=record_id, status=OutcomeStatus.SUCCEEDED)

    @classmethod
    def failed(cls, record_id: str, error: str, status_code: Optional[int] = None) -> "UpsertOutcome":
        return cls(record_id=record_id, status=OutcomeStatus.FAILED, error=error, status_code=status_code)

    @property
    def success(self) -> bool:
        return self.status == OutcomeStatus.SUCCEEDED


class BatchResult(BaseModel):
    """
    Aggregate of one bulk upsert run.

    For a batch that ran to completion succeeded + failed == submitted.
    A cancelled batch reports only the outcomes observed before cancellation;
    the difference is exposed as `unresolved`.
    """

    submitted: int = Field(..., ge=0, description="Records handed to the pipeline")
    succeeded: int = Field(..., ge=0, description="Succeeded outcomes")
    failed: int = Field(..., ge=0, description="Failed outcomes")
    elapsed_seconds: float = Field(..., ge=0, description="Submission start to last outcome collected")
    cancelled: bool = Field(default=False, description="Caller cancelled before every outcome resolved")
    outcomes: List[UpsertOutcome] = Field(default_factory=list, description="Every observed outcome")

    @model_validator(mode='after')
    def validate_counts(self):
        if self.succeeded + self.failed > self.submitted:
            raise ValueError(
                f"Observed outcomes ({self.succeeded + self.failed}) exceed submitted ({self.submitted})"
            )
        if not self.cancelled and self.succeeded + self.failed != self.submitted:
            raise ValueError(
                f"Completed batch must resolve every record: "
                f"{self.succeeded} + {self.failed} != {self.submitted}"
            )
        return self

    @property
    def unresolved(self) -> int:
        return self.submitted - self.succeeded - self.failed

    @property
    def failures(self) -> List[UpsertOutcome]:
        return [o for o in self.outcomes if o.status == OutcomeStatus.FAILED]

    def summary(self) -> Dict[str, Any]:
        """Counts and timing without the per-record outcome list."""
        return {
            'submitted': self.submitted,
            'succeeded': self.succeeded,
            'failed': self.failed,
            'unresolved': self.unresolved,
            'cancelled': self.cancelled,
            'elapsed_seconds': round(self.elapsed_seconds, 3),
        }


class QueryResult(BaseModel):
    """Items and cost of one spatial query run."""

    query_text: str
    items: List[Any] = Field(default_factory=list)
    page_count: int = Field(default=0, ge=0)
    request_charge: float = Field(default=0.0, ge=0)
    elapsed_seconds: float = Field(default=0.0, ge=0)

    @property
    def count(self) -> int:
        return len(self.items)


class SetupReport(BaseModel):
    """Result of provisioning the database/container and importing the dataset."""

    database_name: str
    container_name: str
    batch: BatchResult
    final_throughput: Optional[int] = Field(default=None, description="RU/s after scale-down")
