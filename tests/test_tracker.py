"""
Unit tests for lookup orchestration: session lifecycle and retries.
"""

import asyncio

import pytest

from track_service.environs.env import Config
from track_service.modules.tracker.carriers.web_form import WebFormCarrier
from track_service.modules.tracker.errors import (
	NotFound,
	SessionError,
	StructuralMismatch,
	TrackingTimeout,
)
from track_service.modules.tracker.tracker import Tracker

from conftest import TWO_EVENTS, FakeCarrier, FakeLauncher, make_tracker


@pytest.mark.asyncio
async def test_success_releases_session(launcher):
	carrier = FakeCarrier(rows=TWO_EVENTS)
	tracker = make_tracker(carrier, launcher)

	result = await tracker.get_tracking_info("TEST12345")

	assert result.title == "Tracking Result for TEST12345"
	assert len(result.events) == 2
	assert carrier.calls == [(launcher.sessions[0], "TEST12345")]
	assert launcher.sessions[0].close_calls == 1
	assert tracker.pool.active == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
	NotFound("unknown"),
	TrackingTimeout("slow"),
	StructuralMismatch("changed"),
	SessionError("crashed"),
	RuntimeError("unexpected"),
])
async def test_every_failure_releases_session(launcher, error):
	tracker = make_tracker(FakeCarrier(error=error), launcher)

	with pytest.raises(type(error)):
		await tracker.get_tracking_info("X1")

	assert [s.close_calls for s in launcher.sessions] == [1]
	assert tracker.pool.active == 0


@pytest.mark.asyncio
async def test_partial_rows_never_returned(launcher):
	carrier = FakeCarrier(rows=[{"Date": "1", "Status": "S"}])
	tracker = make_tracker(carrier, launcher)

	with pytest.raises(StructuralMismatch):
		await tracker.get_tracking_info("X1")

	assert tracker.pool.active == 0


@pytest.mark.asyncio
async def test_retry_uses_fresh_session(launcher):
	carrier = FakeCarrier(rows=TWO_EVENTS, errors=[TrackingTimeout("slow")])
	tracker = make_tracker(carrier, launcher, lookup_retries=1)

	result = await tracker.get_tracking_info("X1")

	assert len(result.events) == 2
	assert len(launcher.sessions) == 2
	assert carrier.calls[0][0] is not carrier.calls[1][0]
	assert all(s.close_calls == 1 for s in launcher.sessions)


@pytest.mark.asyncio
async def test_retries_exhausted(launcher):
	carrier = FakeCarrier(error=SessionError("crashed"))
	tracker = make_tracker(carrier, launcher, lookup_retries=2)

	with pytest.raises(SessionError):
		await tracker.get_tracking_info("X1")

	assert len(carrier.calls) == 3
	assert tracker.pool.active == 0


@pytest.mark.asyncio
async def test_not_found_is_not_retried(launcher):
	carrier = FakeCarrier(error=NotFound("unknown"))
	tracker = make_tracker(carrier, launcher, lookup_retries=3)

	with pytest.raises(NotFound):
		await tracker.get_tracking_info("X1")

	assert len(carrier.calls) == 1


@pytest.mark.asyncio
async def test_cancellation_releases_session(launcher):
	tracker = make_tracker(FakeCarrier(rows=TWO_EVENTS, delay=60), launcher)

	task = asyncio.ensure_future(tracker.get_tracking_info("X1"))
	while not launcher.sessions:
		await asyncio.sleep(0.001)
	task.cancel()
	with pytest.raises(asyncio.CancelledError):
		await task
	await asyncio.sleep(0)

	assert launcher.sessions[0].close_calls == 1
	assert tracker.pool.active == 0


@pytest.mark.asyncio
async def test_extra_concurrent_request_overloaded():
	launcher = FakeLauncher()
	tracker = make_tracker(
		FakeCarrier(rows=TWO_EVENTS, delay=0.2),
		launcher,
		max_sessions=2,
		queue_timeout=0.05,
	)

	results = await asyncio.gather(
		*(tracker.get_tracking_info(f"X{i}") for i in range(3)),
		return_exceptions=True,
	)

	overloaded = [r for r in results if isinstance(r, Exception)]
	assert len(overloaded) == 1
	assert type(overloaded[0]).__name__ == "Overloaded"
	assert len(launcher.sessions) == 2
	assert tracker.pool.active == 0


def test_from_config_wires_web_form_carrier():
	config = Config(carrier_url="https://carrier.example.com/track", max_sessions=5, result_timeout=3.0)

	tracker = Tracker.from_config(config)

	assert isinstance(tracker.carrier, WebFormCarrier)
	assert tracker.carrier.url == config.carrier_url
	assert tracker.carrier.result_timeout == 3.0
	assert tracker.pool.max_sessions == 5
