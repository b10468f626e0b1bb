from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Literal

from attio.client import AttioClient
from attio.errors import AttioError, InvalidArgumentError, NotFoundError
from attio.resources.list_object import ListObject
from attio.resources.records import Record
from attio.utils.logging import get_logger

logger = get_logger(__name__)

OnError = Literal["raise", "skip", "continue"]


class TransactionError(AttioError):
    """Raised when a transaction block fails; records it created have been rolled back."""


@dataclass
class ImportResult:
    success: list[Record] = field(default_factory=list)
    errors: list[dict[str, Any]] = field(default_factory=list)


class BaseService:
    """Higher-level record workflows for a single Attio object."""

    def __init__(self, client: AttioClient, object_slug: str):
        if not object_slug:
            raise InvalidArgumentError("object_slug is required")
        self.client = client
        self.object_slug = object_slug
        self._transaction_records: list[Record] = []
        self._in_transaction = False

    @contextmanager
    def transaction(self) -> Iterator["BaseService"]:
        """Destroy every record created inside the block if the block raises.

        Usage:
            with service.transaction() as tx:
                tx.create_record({"name": "Acme"})
        """
        self._in_transaction = True
        self._transaction_records = []
        try:
            yield self
        except Exception as e:
            self._rollback()
            raise TransactionError(f"Transaction failed: {e}") from e
        finally:
            self._in_transaction = False
            self._transaction_records = []

    def find_or_create_by(self, attribute: str, value: Any, defaults: Mapping[str, Any] | None = None) -> Record:
        existing = self.search_by_attribute(attribute, value).first()
        if existing is not None:
            return existing
        return self.create_record({**(defaults or {}), attribute: value})

    def upsert(self, search_attribute: str, search_value: Any, attributes: Mapping[str, Any] | None = None) -> Record:
        existing = self.search_by_attribute(search_attribute, search_value).first()
        if existing is not None:
            existing.update_attributes(attributes or {})
            return existing.save()
        return self.create_record({**(attributes or {}), search_attribute: search_value})

    def import_records(
        self,
        records: list[Mapping[str, Any]],
        batch_size: int = 100,
        on_error: OnError = "raise",
    ) -> ImportResult:
        """Create records in batches.

        on_error="skip" records the whole failed batch as errors; "continue"
        retries that batch one record at a time.
        """
        if on_error not in ("raise", "skip", "continue"):
            raise InvalidArgumentError(f"Invalid on_error: {on_error}")
        if batch_size < 1:
            raise InvalidArgumentError("batch_size must be positive")

        result = ImportResult()
        for start in range(0, len(records), batch_size):
            batch = list(records[start : start + batch_size])
            try:
                result.success.extend(Record.create_batch(self.client, batch, object=self.object_slug))
            except AttioError as e:
                if on_error == "raise":
                    raise
                logger.warning(
                    "Batch import failed",
                    object=self.object_slug,
                    batch_start=start,
                    batch_size=len(batch),
                    error=str(e),
                )
                if on_error == "skip":
                    result.errors.extend({"record": r, "error": str(e)} for r in batch)
                else:
                    self._import_individually(batch, result)
        return result

    def _import_individually(self, batch: list[Mapping[str, Any]], result: ImportResult) -> None:
        for record_data in batch:
            values = record_data.get("values") or record_data
            try:
                result.success.append(self.create_record(values))
            except AttioError as e:
                result.errors.append({"record": record_data, "error": str(e)})

    def search(
        self,
        query: str | None = None,
        filters: Mapping[str, Any] | list[Any] | None = None,
        sort: Any = None,
        limit: int | None = None,
    ) -> ListObject:
        params: dict[str, Any] = {}
        if query:
            params["q"] = query
        if filters:
            params["filter"] = self.build_filters(filters)
        if sort:
            params["sort"] = sort
        if limit:
            params["limit"] = limit
        return Record.list(self.client, params, object=self.object_slug)

    def find_by_ids(self, ids: str | Iterable[str]) -> list[Record]:
        """Retrieve each id in turn, skipping ones that no longer exist."""
        if isinstance(ids, str):
            ids = [ids]
        found = []
        for record_id in ids:
            try:
                found.append(Record.retrieve(self.client, record_id, object=self.object_slug))
            except NotFoundError:
                logger.debug("Record not found", object=self.object_slug, record_id=record_id)
        return found

    def count(self, filters: Mapping[str, Any] | list[Any] | None = None) -> int | None:
        return self.search(filters=filters, limit=1).total_count

    def create_record(self, values: Mapping[str, Any]) -> Record:
        record = Record.create(self.client, {"values": dict(values)}, object=self.object_slug)
        if self._in_transaction:
            self._transaction_records.append(record)
        return record

    def search_by_attribute(self, attribute: str, value: Any) -> ListObject:
        return Record.list(self.client, {"filter": {attribute: value}}, object=self.object_slug)

    @staticmethod
    def build_filters(filters: Mapping[str, Any] | list[Any]) -> Any:
        if isinstance(filters, list):
            return {"$and": filters}
        return dict(filters)

    def _rollback(self) -> None:
        for record in reversed(self._transaction_records):
            try:
                record.destroy()
            except AttioError as e:
                logger.warning("Failed to roll back record", record_id=record.id_value, error=str(e))
        self._transaction_records = []
