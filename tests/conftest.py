"""
Shared fakes: browser sessions and carriers that need no real browser.
"""

import asyncio

import pytest

from track_service.environs.env import BrowserConfig, Config
from track_service.modules.tracker.browser import SessionPool
from track_service.modules.tracker.errors import SessionError
from track_service.modules.tracker.tracker import Tracker


class FakeSession:
	"""Stands in for BrowserSession; counts close() calls."""

	def __init__(self, page=None):
		self.page = page
		self.close_calls = 0

	@property
	def closed(self):
		return self.close_calls > 0

	async def close(self):
		self.close_calls += 1


class FakeLauncher:
	"""Session launcher recording every session it created."""

	def __init__(self, fail=False):
		self.fail = fail
		self.sessions = []

	async def __call__(self, browser_config):
		await asyncio.sleep(0)
		if self.fail:
			raise SessionError("browser executable not found")
		session = FakeSession()
		self.sessions.append(session)
		return session


class FakeCarrier:
	"""Carrier returning fixed rows, raising, or taking its time."""

	def __init__(self, rows=None, error=None, delay=0.0, errors=None):
		self.rows = rows or []
		self.error = error
		# Raised one by one on consecutive calls, before falling back to rows.
		self.errors = list(errors or [])
		self.delay = delay
		self.calls = []

	async def lookup(self, session, tracking_number):
		self.calls.append((session, tracking_number))
		if self.delay:
			await asyncio.sleep(self.delay)
		if self.errors:
			raise self.errors.pop(0)
		if self.error is not None:
			raise self.error
		return self.rows


TWO_EVENTS = [
	{"Status": "Out for delivery", "Date": "2024-05-02 08:10", "Location": "Athens"},
	{"Status": "Arrived at hub", "Date": "2024-05-01 21:45", "Location": "Thessaloniki"},
]


def make_config(**kwargs):
	defaults = dict(
		carrier_url="https://carrier.example.com/track",
		browser=BrowserConfig(),
		result_timeout=1.0,
		max_sessions=2,
		queue_timeout=0.05,
		lookup_retries=0,
	)
	defaults.update(kwargs)
	return Config(**defaults)


def make_tracker(carrier, launcher=None, **config_kwargs):
	config = make_config(**config_kwargs)
	pool = SessionPool(
		config.browser,
		max_sessions=config.max_sessions,
		queue_timeout=config.queue_timeout,
		launcher=launcher or FakeLauncher(),
	)
	return Tracker(config, pool, carrier)


@pytest.fixture
def launcher():
	return FakeLauncher()
