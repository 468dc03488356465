import concurrent.futures
import threading
from unittest.mock import Mock

import pytest
from azure.core.exceptions import AzureError, ResourceNotFoundError
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from azure_fluent_sdk.common.error_codes import ClientError
from azure_fluent_sdk.common.sync_adapter import (
    CompositionError,
    EventLoopThread,
    UnexpectedFailureError,
    block_and_map,
    translate_exception,
    unwrap_exception,
    wait_for,
)


def wrap(exc: BaseException, depth: int) -> BaseException:
    """Wrap ``exc`` in ``depth`` alternating composition layers."""
    for level in range(depth):
        if level % 2:
            outer = CompositionError(f"layer {level}")
            outer.__cause__ = exc
            exc = outer
        else:
            exc = ExceptionGroup(f"layer {level}", [exc])
    return exc


def failing(exc: BaseException):
    async def producer():
        raise exc

    return producer


class TestBlockAndMap:
    """Tests for blocking on deferred results."""

    def test_maps_awaitable_result(self, runner: EventLoopThread):
        """Test the success value is passed through the mapper."""

        async def producer():
            return 21

        assert block_and_map(producer, lambda v: v * 2, runner=runner) == 42

    def test_maps_completed_future(self, runner: EventLoopThread):
        """Test a concurrent.futures.Future is waited on directly."""
        future = concurrent.futures.Future()
        future.set_result("ready")

        assert block_and_map(lambda: future, str.upper, runner=runner) == "READY"

    def test_failed_future_is_unexpected(self, runner: EventLoopThread):
        """Test a failed future surfaces as an unexpected failure."""
        error = ValueError("boom")
        future = concurrent.futures.Future()
        future.set_exception(error)

        with pytest.raises(UnexpectedFailureError) as exc_info:
            block_and_map(lambda: future, lambda v: v, runner=runner)

        assert exc_info.value.cause is error

    def test_typed_failure_is_reraised_unchanged(self, runner: EventLoopThread):
        error = ResourceNotFoundError("missing")

        with pytest.raises(ResourceNotFoundError) as exc_info:
            block_and_map(failing(error), lambda v: v, runner=runner)

        assert exc_info.value is error

    @given(depth=st.integers(min_value=0, max_value=12))
    @settings(
        max_examples=25,
        suppress_health_check=[HealthCheck.function_scoped_fixture],
        deadline=None,
    )
    def test_wrapped_typed_failure_is_unwrapped(
        self, runner: EventLoopThread, depth: int
    ):
        """Test a typed failure is recovered through any number of wrappers."""
        error = AzureError("throttled")

        with pytest.raises(AzureError) as exc_info:
            block_and_map(failing(wrap(error, depth)), lambda v: v, runner=runner)

        assert exc_info.value is error

    def test_deeply_wrapped_typed_failure_is_unwrapped(self, runner: EventLoopThread):
        error = AzureError("throttled")

        with pytest.raises(AzureError) as exc_info:
            block_and_map(failing(wrap(error, 200)), lambda v: v, runner=runner)

        assert exc_info.value is error

    def test_untyped_failure_is_unexpected(self, runner: EventLoopThread):
        error = KeyError("id")

        with pytest.raises(UnexpectedFailureError) as exc_info:
            block_and_map(failing(wrap(error, 3)), lambda v: v, runner=runner)

        assert exc_info.value.cause is error
        assert exc_info.value.__cause__ is error
        assert "KeyError" in str(exc_info.value)

    def test_unexpected_failure_is_not_wrapped_twice(self, runner: EventLoopThread):
        error = UnexpectedFailureError(OSError("reset"))

        with pytest.raises(UnexpectedFailureError) as exc_info:
            block_and_map(failing(error), lambda v: v, runner=runner)

        assert exc_info.value is error

    def test_custom_typed_errors(self, runner: EventLoopThread):
        error = KeyError("id")

        with pytest.raises(KeyError) as exc_info:
            block_and_map(
                failing(error), lambda v: v, runner=runner, typed_errors=(KeyError,)
            )

        assert exc_info.value is error

    def test_mapper_failure_is_unexpected(self, runner: EventLoopThread):
        async def producer():
            return "not a number"

        with pytest.raises(UnexpectedFailureError) as exc_info:
            block_and_map(producer, int, runner=runner)

        assert isinstance(exc_info.value.cause, ValueError)

    def test_producer_called_once_per_call(self, runner: EventLoopThread):
        async def value():
            return 1

        producer = Mock(side_effect=lambda: value())

        block_and_map(producer, lambda v: v, runner=runner)
        block_and_map(producer, lambda v: v, runner=runner)

        assert producer.call_count == 2

    def test_concurrent_callers_share_runner(self, runner: EventLoopThread):
        """Test several threads can block on the same loop at once."""

        def call(n: int) -> int:
            async def producer():
                return n

            return block_and_map(producer, lambda v: v * 10, runner=runner)

        with concurrent.futures.ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(call, range(20)))

        assert results == [n * 10 for n in range(20)]

    def test_closed_runner_raises_client_error(self, runner: EventLoopThread):
        async def producer():
            return 1

        runner.close()

        with pytest.raises(ClientError) as exc_info:
            block_and_map(producer, lambda v: v, runner=runner)

        assert str(ClientError.CLIENT_CLOSED_ERROR) in str(exc_info.value)


class TestUnwrapException:
    """Tests for stripping composition wrappers."""

    def test_returns_unwrapped_exception_itself(self):
        error = ValueError("plain")
        assert unwrap_exception(error) is error

    def test_multi_member_group_is_kept(self):
        group = ExceptionGroup("two", [ValueError("a"), KeyError("b")])
        assert unwrap_exception(group) is group

    def test_composition_error_without_cause_is_kept(self):
        error = CompositionError("nothing inside")
        assert unwrap_exception(error) is error

    def test_cycle_terminates(self):
        first = CompositionError("first")
        second = CompositionError("second")
        first.__cause__ = second
        second.__cause__ = first

        assert unwrap_exception(first) is second

    def test_max_depth_bounds_unwrapping(self):
        error = AzureError("deep")
        wrapped = wrap(error, 6)

        assert unwrap_exception(wrapped, max_depth=2) is not error
        assert unwrap_exception(wrapped, max_depth=6) is error

    def test_translate_unwrapped_cycle_is_unexpected(self):
        first = CompositionError("first")
        first.__cause__ = first

        translated = translate_exception(first)

        assert isinstance(translated, UnexpectedFailureError)
        assert translated.cause is first


class TestWaitFor:
    def test_rejects_plain_values(self, runner: EventLoopThread):
        with pytest.raises(TypeError):
            wait_for(42, runner)


class TestEventLoopThread:
    """Tests for the background loop thread."""

    def test_starts_lazily(self):
        loop_thread = EventLoopThread(name="lazy-loop")
        try:
            assert not loop_thread.is_running

            async def producer():
                return threading.current_thread().name

            assert loop_thread.submit(producer()).result() == "lazy-loop"
            assert loop_thread.is_running
        finally:
            loop_thread.close()

        assert loop_thread.is_closed
        assert not loop_thread.is_running

    def test_close_is_idempotent(self):
        loop_thread = EventLoopThread()
        loop_thread.close()
        loop_thread.close()

        assert loop_thread.is_closed

    def test_submit_after_close_raises(self):
        loop_thread = EventLoopThread()
        loop_thread.close()

        async def producer():
            return 1

        coroutine = producer()
        try:
            with pytest.raises(ClientError):
                loop_thread.submit(coroutine)
        finally:
            coroutine.close()
