"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues)

Bulk import failures come in two flavours. A SubmissionError means the batch
never started and is raised to the caller. An ItemWriteError belongs to a
single record; the pipeline captures it as a failed outcome and keeps going.
"""

from typing import Optional


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These indicate:
    - Wrong types passed to functions
    - Store handles that do not implement IDocumentStore
    - Partition key extractors that are not callable

    These should NEVER be caught and handled.
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime failures.

    Subclasses represent specific categories of failures.
    """
    pass


class SubmissionError(BusinessLogicError):
    """
    The bulk batch cannot start.

    Examples:
        - Container does not exist
        - Account endpoint unreachable
        - Credential rejected
    """
    pass


class ItemWriteError(BusinessLogicError):
    """
    A single document write failed.

    Never raised out of the pipeline - recorded as a Failed outcome.

    Examples:
        - Missing partition key value
        - Conflict or precondition failure
        - Transient store error after the client gave up retrying
    """

    def __init__(self, record_id: str, message: str, status_code: Optional[int] = None):
        self.record_id = record_id
        self.status_code = status_code
        super().__init__(message)


class DataImportError(BusinessLogicError):
    """
    Dataset could not be loaded.

    Examples:
        - File missing or unreadable
        - Payload is not a JSON array
        - Record without an id
    """
    pass


class ProvisioningError(BusinessLogicError):
    """
    Database or container provisioning failed.

    Examples:
        - Insufficient permissions
        - Throughput outside account limits
    """
    pass


class QueryExecutionError(BusinessLogicError):
    """
    A spatial query failed while paging results.

    Examples:
        - Malformed geometry parameter
        - Container missing
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    These are typically fatal and indicate misconfiguration
    that prevents the system from operating.

    Examples:
        - Missing COSMOS_CONNECTION_STRING and COSMOS_ENDPOINT
        - Non-numeric BULK_MAX_WORKERS
    """
    pass
