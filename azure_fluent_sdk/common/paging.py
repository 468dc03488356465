"""
Synchronous iteration over paged asynchronous sequences.

``PagedIterable`` turns a page-based asynchronous sequence (for example
``azure.core.async_paging.AsyncItemPaged`` or any async iterable of pages) into a
plain iterable. Iterating it yields items across all pages; ``by_page()`` yields
the pages themselves. Each pull may block while the next page is fetched.

The iterable is forward-only: once the source is exhausted every further
iteration is empty, and a fresh call against the source operation is needed to
read the data again. Stopping early (breaking out of the loop, closing the
iterator, or calling ``close()``) closes the source on the event loop.
"""

from typing import Any, Generic, Iterator, List, Optional, TypeVar

from azure.core.exceptions import AzureError

from azure_fluent_sdk.common.sync_adapter import (
    EventLoopThread,
    TypedErrors,
    block_and_map,
)

T = TypeVar("T")

_EXHAUSTED = object()


class PagedIterable(Generic[T]):
    """Pull-based, non-restartable iterable over a paged asynchronous sequence.

    Attributes:
        runner (EventLoopThread): Loop the page fetches run on.
        typed_errors (Tuple[Type[BaseException], ...]): Typed failure taxonomy used
            when a page fetch fails.
    """

    def __init__(
        self,
        source: Any,
        runner: EventLoopThread,
        typed_errors: TypedErrors = (AzureError,),
    ):
        """
        Args:
            source: An async iterable of pages, or an object exposing ``by_page()``
                that returns one. Pages may be sync or async iterables of items.
            runner (EventLoopThread): Loop the page fetches run on.
            typed_errors (Tuple[Type[BaseException], ...]): Typed failure taxonomy.
        """
        self._source = source
        self._pages: Optional[Any] = None
        self._exhausted = False
        self.runner = runner
        self.typed_errors = typed_errors

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def __iter__(self) -> Iterator[T]:
        try:
            while True:
                page = self._next_page()
                if page is _EXHAUSTED:
                    return
                yield from page
        finally:
            self.close()

    def by_page(self) -> Iterator[List[T]]:
        """Yield the remaining pages, each materialized as a list."""
        try:
            while True:
                page = self._next_page()
                if page is _EXHAUSTED:
                    return
                yield page
        finally:
            self.close()

    def close(self) -> None:
        """Stop iterating and close the source's page iterator. Idempotent."""
        if self._exhausted:
            return
        self._exhausted = True
        aclose = getattr(self._pages, "aclose", None)
        if aclose is None or self.runner.is_closed:
            return
        block_and_map(
            aclose, lambda _: None, runner=self.runner, typed_errors=self.typed_errors
        )

    def __enter__(self) -> "PagedIterable[T]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _next_page(self) -> Any:
        if self._exhausted:
            return _EXHAUSTED
        try:
            page = block_and_map(
                self._pull_page,
                lambda value: value,
                runner=self.runner,
                typed_errors=self.typed_errors,
            )
        except Exception:
            self._exhausted = True
            raise
        if page is _EXHAUSTED:
            self._exhausted = True
        return page

    async def _pull_page(self) -> Any:
        if self._pages is None:
            pages = (
                self._source.by_page()
                if hasattr(self._source, "by_page")
                else self._source
            )
            self._pages = pages.__aiter__()
        try:
            page = await self._pages.__anext__()
        except StopAsyncIteration:
            return _EXHAUSTED
        if hasattr(page, "__aiter__"):
            return [item async for item in page]
        return list(page)
