"""
Synchronous adapter over deferred results produced by asynchronous clients.

Asynchronous Azure clients hand back a deferred result: a coroutine (or any other
awaitable) when they run on an asyncio event loop, or a
``concurrent.futures.Future`` when they run on a thread pool. This module blocks
the calling thread on such a result, maps the success value through a
caller-supplied function, and translates failures into the caller's error
taxonomy:

- a typed failure (for example ``CosmosException``) is re-raised unchanged, no
  matter how many composition layers wrapped it;
- anything else is raised as ``UnexpectedFailureError`` carrying the original
  exception as its cause.

Example:
    >>> runner = EventLoopThread()
    >>> response = block_and_map(
    ...     lambda: async_client.create_database(properties),
    ...     CosmosDatabaseResponse,
    ...     runner=runner,
    ...     typed_errors=(CosmosException,),
    ... )

The adapter never logs, retries or times out. It must not be called from the
runner's own event loop thread (or from any coroutine that has to stay
non-blocking): the loop would wait on itself.
"""

import asyncio
import concurrent.futures
import inspect
import threading
from typing import (
    Any,
    Awaitable,
    Callable,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from azure.core.exceptions import AzureError

from azure_fluent_sdk.common.error_codes import ClientError
from azure_fluent_sdk.constants import SYNC_LOOP_THREAD_NAME, SYNC_UNWRAP_MAX_DEPTH
from azure_fluent_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

R = TypeVar("R")
W = TypeVar("W")

DeferredResult = Union[Awaitable[R], "concurrent.futures.Future[R]"]
TypedErrors = Tuple[Type[BaseException], ...]


class CompositionError(Exception):
    """Wrapper added by a composition layer around an underlying failure.

    The wrapped failure is carried as ``__cause__``; ``unwrap_exception`` strips
    this wrapper. Raise it as ``raise CompositionError("...") from error``.
    """

    pass


class UnexpectedFailureError(RuntimeError):
    """A failure outside the typed failure taxonomy.

    Attributes:
        cause (BaseException): The original exception, also set as ``__cause__``.
    """

    def __init__(self, cause: BaseException):
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause
        self.__cause__ = cause


class EventLoopThread:
    """A background asyncio event loop running on a daemon thread.

    Awaitables submitted from other threads run on this loop; the caller gets a
    ``concurrent.futures.Future`` to block on. The loop starts on first submit.

    Attributes:
        name (str): Name of the background thread.
    """

    def __init__(self, name: str = SYNC_LOOP_THREAD_NAME):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def is_running(self) -> bool:
        return self._loop is not None and self._loop.is_running()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _ensure_started(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._closed:
                raise ClientError(
                    f"{ClientError.CLIENT_CLOSED_ERROR}: event loop thread '{self.name}' is closed"
                )
            if self._loop is None:
                loop = asyncio.new_event_loop()
                started = threading.Event()
                thread = threading.Thread(
                    target=self._run, args=(loop, started), name=self.name, daemon=True
                )
                thread.start()
                if not started.wait(timeout=10):
                    loop.close()
                    raise ClientError(
                        f"{ClientError.EVENT_LOOP_ERROR}: thread '{self.name}' did not start"
                    )
                self._loop = loop
                self._thread = thread
                logger.debug(f"Started event loop thread {self.name}")
            return self._loop

    @staticmethod
    def _run(loop: asyncio.AbstractEventLoop, started: threading.Event) -> None:
        asyncio.set_event_loop(loop)
        loop.call_soon(started.set)
        loop.run_forever()

    def submit(self, awaitable: Awaitable[R]) -> "concurrent.futures.Future[R]":
        """Schedule ``awaitable`` on the background loop.

        Args:
            awaitable (Awaitable[R]): Coroutine or other awaitable to run.

        Returns:
            concurrent.futures.Future[R]: Future resolved with the awaitable's outcome.

        Raises:
            ClientError: If the loop thread has been closed.
        """
        loop = self._ensure_started()
        return asyncio.run_coroutine_threadsafe(_await(awaitable), loop)

    def close(self) -> None:
        """Stop the loop, join its thread and release the loop. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None

        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join()
        loop.close()
        logger.debug(f"Stopped event loop thread {self.name}")


async def _await(awaitable: Awaitable[R]) -> R:
    return await awaitable


def unwrap_exception(
    exc: BaseException, max_depth: int = SYNC_UNWRAP_MAX_DEPTH
) -> BaseException:
    """Strip composition wrappers and return the innermost cause.

    Composition wrappers are single-member exception groups and
    ``CompositionError`` instances. Unwrapping stops when an exception is seen
    twice, which ends every cyclic chain. ``max_depth`` only bounds the work
    spent on an acyclic chain; the default is far above any real nesting.

    Args:
        exc (BaseException): The exception as raised by the concurrency layer.
        max_depth (int): Maximum number of wrappers to strip.

    Returns:
        BaseException: The innermost cause (``exc`` itself when not wrapped).
    """
    seen = {id(exc)}
    current = exc
    for _ in range(max_depth):
        inner = _composition_cause(current)
        if inner is None or id(inner) in seen:
            break
        seen.add(id(inner))
        current = inner
    return current


def _composition_cause(exc: BaseException) -> Optional[BaseException]:
    if isinstance(exc, BaseExceptionGroup) and len(exc.exceptions) == 1:
        return exc.exceptions[0]
    if isinstance(exc, CompositionError):
        return exc.__cause__
    return None


def translate_exception(
    exc: BaseException, typed_errors: TypedErrors = (AzureError,)
) -> BaseException:
    """Map a failure onto the typed / unexpected taxonomy.

    Args:
        exc (BaseException): Failure observed while waiting on a deferred result.
        typed_errors (Tuple[Type[BaseException], ...]): Exception types that make
            up the caller's typed failure taxonomy.

    Returns:
        BaseException: The innermost typed failure unchanged, or an
        ``UnexpectedFailureError`` wrapping the innermost cause.
    """
    root = unwrap_exception(exc)
    if isinstance(root, typed_errors) or isinstance(root, UnexpectedFailureError):
        return root
    return UnexpectedFailureError(root)


def wait_for(deferred: Any, runner: EventLoopThread) -> Any:
    """Block the calling thread until ``deferred`` resolves and return its value.

    Args:
        deferred: A ``concurrent.futures.Future`` or an awaitable.
        runner (EventLoopThread): Loop that awaitables are submitted to.

    Returns:
        The success value of the deferred result.

    Raises:
        TypeError: If ``deferred`` is neither a future nor an awaitable.
    """
    if isinstance(deferred, concurrent.futures.Future):
        return deferred.result()
    if inspect.isawaitable(deferred):
        return runner.submit(deferred).result()
    raise TypeError(
        f"Expected an awaitable or concurrent.futures.Future, got {type(deferred).__name__}"
    )


def block_and_map(
    producer: Callable[[], Any],
    mapper: Callable[[R], W],
    *,
    runner: EventLoopThread,
    typed_errors: TypedErrors = (AzureError,),
) -> W:
    """Block on a fresh deferred result and return the mapped success value.

    Args:
        producer (Callable[[], DeferredResult]): Zero-argument callable returning
            a new deferred result on every call.
        mapper (Callable[[R], W]): Pure function applied to the success value.
        runner (EventLoopThread): Loop used for awaitable deferred results.
        typed_errors (Tuple[Type[BaseException], ...]): Typed failure taxonomy.

    Returns:
        W: ``mapper(value)``.

    Raises:
        BaseException: The innermost typed failure, unchanged.
        UnexpectedFailureError: For any other failure, with the original as cause.
        ClientError: If ``runner`` is already closed.
    """
    if runner.is_closed:
        raise ClientError(
            f"{ClientError.CLIENT_CLOSED_ERROR}: cannot block on a closed event loop thread"
        )

    try:
        return mapper(wait_for(producer(), runner))
    except Exception as e:
        failure = translate_exception(e, typed_errors)
    raise failure
