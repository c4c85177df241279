# -*- coding: utf-8 -*-
"""Module with handler that allows to POST tracking number and get tracking info.
"""
import asyncio
import logging

from track_service.base_handler import BaseHandler, ApplicationError
from track_service.modules.tracker.errors import TrackingError
from track_service.modules.tracker.models import TrackingRequest
from track_service.validation.tracker import USER_REQUEST_ERROR_MESSAGE, USER_REQUEST_SCHEMA


logger = logging.getLogger(__name__)


class TrackerHandler(BaseHandler):
	def initialize(self):
		self._lookup = None
		self._disconnected = False

	async def post(self):
		"""Get tracking info by tracking number from the carrier page."""
		request = TrackingRequest(**self.validate(
			USER_REQUEST_SCHEMA,
			custom_message=USER_REQUEST_ERROR_MESSAGE
		))

		# Separate task, so it could be cancelled if client goes away.
		self._lookup = asyncio.ensure_future(
			self.application.tracker.get_tracking_info(request.tracking_number)
		)
		try:
			result = await self._lookup
		except asyncio.CancelledError:
			if not self._disconnected:
				raise
			logger.info('Client went away, lookup for %r cancelled', request.tracking_number)
			return
		except TrackingError as e:
			logger.log(
				e.log_level,
				'Lookup for %r failed: %s: %s',
				request.tracking_number, type(e).__name__, e,
				exc_info=e.log_level >= logging.ERROR
			)
			# Internal details stay in logs.
			raise ApplicationError(status_code=e.http_status, message=e.public_message) from e

		self.write(result.to_response())

	def on_connection_close(self):
		self._disconnected = True
		if self._lookup is not None and not self._lookup.done():
			self._lookup.cancel()
