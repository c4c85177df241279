# -*- coding: utf-8 -*-
"""Low-level module for tracking info.

Per request:
	session acquired -> carrier lookup -> normalize -> session released
Session is released on every path, failed lookups included.
"""
import asyncio
import logging

from track_service.environs.env import Config, load_config
from track_service.modules.tracker.browser import SessionPool
from track_service.modules.tracker.carriers.common import Carrier
from track_service.modules.tracker.carriers.web_form import WebFormCarrier
from track_service.modules.tracker.errors import SessionError, TrackingTimeout
from track_service.modules.tracker.models import TrackingResult
from track_service.modules.tracker.normalizer import normalize


logger = logging.getLogger(__name__)

# It's worth another try only if the problem could be transient.
_RETRYABLE = (TrackingTimeout, SessionError)

# For input validation:
TRACKING_NUMBER_MAX_LENGTH = 128


class Tracker:
	"""Looks up tracking numbers using browser sessions from `pool`."""

	def __init__(self, config: Config, pool: SessionPool, carrier: Carrier):
		self.config = config
		self.pool = pool
		self.carrier = carrier

	@classmethod
	def from_config(cls, config: Config) -> 'Tracker':
		pool = SessionPool(
			config.browser,
			max_sessions=config.max_sessions,
			queue_timeout=config.queue_timeout
		)
		carrier = WebFormCarrier(config.carrier_url, result_timeout=config.result_timeout)
		return cls(config, pool, carrier)

	async def _lookup_once(self, tracking_number: str) -> TrackingResult:
		async with self.pool.session() as session:
			raw_events = await self.carrier.lookup(session, tracking_number)
		return normalize(tracking_number, raw_events)

	async def get_tracking_info(self, tracking_number: str) -> TrackingResult:
		"""Get tracking info by tracking number.

		TrackingError subclasses will be raised on failures; timeouts and
		browser failures are retried `lookup_retries` times first, each time
		with a fresh session.
		"""
		attempts = self.config.lookup_retries + 1
		for attempt in range(1, attempts + 1):
			try:
				return await self._lookup_once(tracking_number)
			except _RETRYABLE as e:
				if attempt == attempts:
					raise
				logger.warning(
					'Attempt %d/%d for %r failed: %s: %s',
					attempt, attempts, tracking_number, type(e).__name__, e
				)


async def main():
	"""For local manual testing."""
	config = load_config()
	tracker = Tracker.from_config(config)
	result = await tracker.get_tracking_info(config.tracking_number_default_value)
	print(result.to_response())


if __name__ == '__main__':
	asyncio.run(main())
