"""One page of a list response, plus cursor-driven access to the pages after it."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from attio.errors import InvalidArgumentError
from attio.http.response_parser import normalize_pagination

if TYPE_CHECKING:
    from attio.client import AttioClient


class ListObject:
    """An immutable page of resources.

    `params` and `opts` are the ones that produced this page; the next page is
    requested with the same params, overriding only `cursor`.
    """

    def __init__(
        self,
        response: Any,
        resource_class: type,
        client: AttioClient | None = None,
        params: Mapping[str, Any] | None = None,
        opts: Mapping[str, Any] | None = None,
    ):
        self.resource_class = resource_class
        self.client = client
        self.params = dict(params or {})
        self.opts = dict(opts or {})

        if isinstance(response, Mapping) and "data" in response:
            raw_data = response.get("data") or []
            pagination = response.get("pagination")
        elif isinstance(response, (list, tuple)):
            # Some endpoints return a bare array with no pagination block
            raw_data = response
            pagination = None
        elif response is None:
            raw_data = []
            pagination = None
        else:
            raise InvalidArgumentError(f"Cannot build a list from {type(response).__name__}")

        if not isinstance(raw_data, (list, tuple)):
            raise InvalidArgumentError("List response data must be an array")

        self.data: tuple[Any, ...] = tuple(resource_class(item, client, **self.opts) for item in raw_data)
        self.pagination: dict[str, Any] = normalize_pagination(pagination)

    @property
    def has_next_page(self) -> bool:
        return self.pagination.get("has_next_page") is True

    @property
    def has_previous_page(self) -> bool:
        return self.pagination.get("has_previous_page") is True

    @property
    def next_cursor(self) -> str | None:
        return self.pagination.get("next_cursor")

    @property
    def previous_cursor(self) -> str | None:
        return self.pagination.get("previous_cursor")

    @property
    def total_count(self) -> int | None:
        return self.pagination.get("total_count")

    @property
    def page_size(self) -> int | None:
        return self.pagination.get("page_size")

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index):
        return self.data[index]

    def __bool__(self) -> bool:
        return bool(self.data)

    @property
    def empty(self) -> bool:
        return not self.data

    def first(self) -> Any | None:
        return self.data[0] if self.data else None

    def last(self) -> Any | None:
        return self.data[-1] if self.data else None

    def next_page(self) -> ListObject | None:
        """Fetch the following page, or return None when this is the last one."""
        if not self.has_next_page or self.next_cursor is None:
            return None
        if self.client is None:
            raise InvalidArgumentError("Cannot fetch the next page without a client")
        return self.resource_class.list(self.client, {**self.params, "cursor": self.next_cursor}, **self.opts)

    def auto_paging_pages(self) -> Iterator[ListObject]:
        """Yield this page and every page after it, fetching each only when asked for."""
        page: ListObject | None = self
        while page is not None:
            yield page
            page = page.next_page()

    def auto_paging_iter(self) -> Iterator[Any]:
        """Yield every resource from this page onwards, in page order then in-page order."""
        for page in self.auto_paging_pages():
            yield from page.data

    def auto_paging_each(self, consumer: Callable[[Any], Any]) -> None:
        for item in self.auto_paging_iter():
            consumer(item)

    def to_dict(self) -> dict[str, Any]:
        return {"data": [item.to_dict() for item in self.data], "pagination": dict(self.pagination)}

    def __repr__(self) -> str:
        name = self.resource_class.__name__
        return f"<ListObject {name} data=[{len(self.data)} items] pagination={self.pagination!r}>"
