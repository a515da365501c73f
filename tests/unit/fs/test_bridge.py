"""Unit tests for the blocking, callback and awaitable adapters."""

import asyncio
from unittest.mock import MagicMock

import pytest
from dirkit.fs.bridge import bridge, dispatch, run_blocking
from dirkit.fs.models import ResultEnvelope, Status


async def _value(value: object) -> object:
    await asyncio.sleep(0)
    return value


async def _fail(error: Exception) -> None:
    await asyncio.sleep(0)
    raise error


class TestRunBlocking:
    """Tests for run_blocking."""

    def test_without_loop(self) -> None:
        """The coroutine's value is returned."""
        assert run_blocking(_value(3)) == 3

    def test_propagates_errors(self) -> None:
        """Exceptions raised by the coroutine propagate."""
        with pytest.raises(OSError, match="disk"):
            run_blocking(_fail(OSError("disk")))

    @pytest.mark.asyncio
    async def test_inside_running_loop(self) -> None:
        """A running loop in the caller's thread does not block the call."""
        assert run_blocking(_value("ok")) == "ok"


class TestDispatch:
    """Tests for dispatch."""

    def test_requires_running_loop(self) -> None:
        """Callback mode needs a running event loop."""
        with pytest.raises(RuntimeError):
            dispatch(_value(1), MagicMock())

    @pytest.mark.asyncio
    async def test_reports_success_once(self) -> None:
        """on_success receives the result and on_error is not called."""
        on_success = MagicMock()
        on_error = MagicMock()

        await dispatch(_value(5), on_success, on_error)
        await asyncio.sleep(0)

        on_success.assert_called_once_with(5)
        on_error.assert_not_called()

    @pytest.mark.asyncio
    async def test_reports_failure_once(self) -> None:
        """on_error receives the exception and on_success is not called."""
        on_success = MagicMock()
        on_error = MagicMock()
        error = PermissionError("denied")

        task = dispatch(_fail(error), on_success, on_error)
        await asyncio.gather(task, return_exceptions=True)
        await asyncio.sleep(0)

        on_error.assert_called_once_with(error)
        on_success.assert_not_called()

    @pytest.mark.asyncio
    async def test_unhandled_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """A failure without on_error is logged as an error."""
        task = dispatch(_fail(OSError("gone")), MagicMock())
        await asyncio.gather(task, return_exceptions=True)
        await asyncio.sleep(0)

        assert "Unhandled filesystem error: gone" in caplog.text


class TestBridge:
    """Tests for bridge."""

    @pytest.mark.asyncio
    async def test_resolves_with_callback_value(self) -> None:
        """A PENDING start resolves through the success callback."""
        envelope = ResultEnvelope(Status.OK, ["x"])

        def start(resolve, reject):  # type: ignore[no-untyped-def]
            asyncio.get_running_loop().call_soon(resolve, envelope)
            return ResultEnvelope(Status.PENDING)

        assert await bridge(start) is envelope

    @pytest.mark.asyncio
    async def test_immediate_status_resolves(self) -> None:
        """A non-PENDING immediate result resolves at once."""
        result = await bridge(lambda resolve, reject: ResultEnvelope(Status.NOT_PERMITTED))

        assert result.status == Status.NOT_PERMITTED

    @pytest.mark.asyncio
    async def test_immediate_bare_status(self) -> None:
        """Bare statuses are treated like envelopes."""
        assert await bridge(lambda resolve, reject: Status.ALREADY_EXISTS) == Status.ALREADY_EXISTS

    @pytest.mark.asyncio
    async def test_rejection_raises(self) -> None:
        """A rejection is raised from the await."""

        def start(resolve, reject):  # type: ignore[no-untyped-def]
            asyncio.get_running_loop().call_soon(reject, OSError("io"))
            return Status.PENDING

        with pytest.raises(OSError, match="io"):
            await bridge(start)

    @pytest.mark.asyncio
    async def test_late_second_callback_ignored(self) -> None:
        """Only the first settlement counts."""

        def start(resolve, reject):  # type: ignore[no-untyped-def]
            loop = asyncio.get_running_loop()
            loop.call_soon(resolve, Status.OK)
            loop.call_soon(reject, OSError("late"))
            return Status.PENDING

        assert await bridge(start) == Status.OK
