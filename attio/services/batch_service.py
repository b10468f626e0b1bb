from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from attio.client import AttioClient
from attio.errors import InvalidArgumentError
from attio.resources.list_entries import ListEntry
from attio.resources.records import Record
from attio.utils.logging import get_logger

logger = get_logger(__name__)

MAX_BATCH_SIZE = 100

OPERATION_TYPES = ("create", "create_batch", "update", "delete", "add_to_list", "remove_from_list")

Operation = Mapping[str, Any]


@dataclass
class BatchResult:
    success: list[dict[str, Any]] = field(default_factory=list)
    errors: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    processed: int = 0

    @property
    def success_count(self) -> int:
        return len(self.success)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def percentage(self) -> float:
        if not self.total:
            return 100.0
        return round(self.processed / self.total * 100, 2)

    def progress(self) -> dict[str, Any]:
        return {
            "processed": self.processed,
            "total": self.total,
            "success_count": self.success_count,
            "error_count": self.error_count,
            "percentage": self.percentage,
        }


def validate_operation(operation: Operation) -> None:
    op_type = operation.get("type")
    if not op_type:
        raise InvalidArgumentError("Operation must have a type")
    if op_type not in OPERATION_TYPES:
        raise InvalidArgumentError(f"Unknown operation type: {op_type}")

    if op_type in ("create", "create_batch"):
        if not operation.get("object") or not (operation.get("values") or operation.get("records")):
            raise InvalidArgumentError("Create operation requires object and values/records")
    elif op_type == "update":
        if not (operation.get("object") and operation.get("record_id") and operation.get("values")):
            raise InvalidArgumentError("Update operation requires object, record_id, and values")
    elif op_type == "delete":
        if not (operation.get("object") and operation.get("record_id")):
            raise InvalidArgumentError("Delete operation requires object and record_id")
    elif op_type == "add_to_list":
        if not (operation.get("list_id") and operation.get("record_id") and operation.get("object")):
            raise InvalidArgumentError("add_to_list operation requires list_id, object, and record_id")
    elif op_type == "remove_from_list":
        if not (operation.get("list_id") and operation.get("entry_id")):
            raise InvalidArgumentError("remove_from_list operation requires list_id and entry_id")


class BatchService:
    """Runs many record operations sequentially, collecting per-operation results.

    Each operation is a mapping with a "type" (one of OPERATION_TYPES) plus the
    fields that type needs. Failures are recorded and processing continues,
    unless `fail_fast` is set.
    """

    def __init__(
        self,
        client: AttioClient,
        fail_fast: bool = False,
        on_progress: Callable[[dict[str, Any]], None] | None = None,
        on_error: Callable[[dict[str, Any]], None] | None = None,
        on_success: Callable[[Operation, Any], None] | None = None,
    ):
        self.client = client
        self.fail_fast = fail_fast
        self.on_progress = on_progress
        self.on_error = on_error
        self.on_success = on_success

    def execute(self, operations: list[Operation], batch_size: int = MAX_BATCH_SIZE) -> BatchResult:
        if batch_size < 1:
            raise InvalidArgumentError("batch_size must be positive")
        for operation in operations:
            validate_operation(operation)

        result = BatchResult(total=len(operations))
        for batch_index, start in enumerate(range(0, len(operations), batch_size)):
            for index, operation in enumerate(operations[start : start + batch_size]):
                self._process(operation, result, batch_index, index)

        logger.info(
            "Batch complete",
            total=result.total,
            success_count=result.success_count,
            error_count=result.error_count,
        )
        return result

    def create_records(
        self, records_by_object: Mapping[str, list[Mapping[str, Any]]], batch_size: int = MAX_BATCH_SIZE
    ) -> BatchResult:
        """One create_batch operation per `batch_size` chunk of each object's records."""
        operations = [
            {"type": "create_batch", "object": object_slug, "records": records[i : i + batch_size]}
            for object_slug, records in records_by_object.items()
            for i in range(0, len(records), batch_size)
        ]
        return self.execute(operations)

    def update_records(self, updates: list[Mapping[str, Any]], batch_size: int = MAX_BATCH_SIZE) -> BatchResult:
        operations = [
            {"type": "update", "object": u.get("object"), "record_id": u.get("record_id"), "values": u.get("values")}
            for u in updates
        ]
        return self.execute(operations, batch_size=batch_size)

    def delete_records(self, deletions: list[Mapping[str, Any]], batch_size: int = MAX_BATCH_SIZE) -> BatchResult:
        operations = [
            {"type": "delete", "object": d.get("object"), "record_id": d.get("record_id")} for d in deletions
        ]
        return self.execute(operations, batch_size=batch_size)

    def _process(self, operation: Operation, result: BatchResult, batch_index: int, index: int) -> None:
        try:
            outcome = self._execute_operation(operation)
        except Exception as e:
            error_info = {
                "operation": operation,
                "error": str(e),
                "error_class": type(e).__name__,
                "batch_index": batch_index,
                "operation_index": index,
            }
            result.errors.append(error_info)
            result.processed += 1
            logger.warning("Batch operation failed", type=operation.get("type"), error=str(e))
            if self.on_error:
                self.on_error(error_info)
            self._report_progress(result)
            if self.fail_fast:
                raise
            return

        result.success.append({"operation": operation, "result": outcome})
        result.processed += 1
        if self.on_success:
            self.on_success(operation, outcome)
        self._report_progress(result)

    def _execute_operation(self, operation: Operation) -> Any:
        op_type = operation["type"]
        if op_type == "create":
            return Record.create(self.client, {"values": operation["values"]}, object=operation["object"])
        if op_type == "create_batch":
            return Record.create_batch(self.client, list(operation["records"]), object=operation["object"])
        if op_type == "update":
            return Record.update(
                self.client, operation["record_id"], {"values": operation["values"]}, object=operation["object"]
            )
        if op_type == "delete":
            return Record.delete(self.client, operation["record_id"], object=operation["object"])
        if op_type == "add_to_list":
            params = {"parent_record_id": operation["record_id"], "parent_object": operation["object"]}
            return ListEntry.create(self.client, params, list=operation["list_id"])
        if op_type == "remove_from_list":
            return ListEntry.delete(self.client, operation["entry_id"], list=operation["list_id"])
        raise InvalidArgumentError(f"Unknown operation type: {op_type}")

    def _report_progress(self, result: BatchResult) -> None:
        if self.on_progress:
            self.on_progress(result.progress())
