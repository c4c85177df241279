# -*- coding: utf-8 -*-
"""Module with health check handler, responds with "ok" to GET request.

With `?verbose=1` responds with JSON instead: status and session pool stats.
"""
from track_service.base_handler import BaseHandler


class HealthCheckHandler(BaseHandler):
	"""Can be used to health-check requests"""
	def get(self):
		self.set_status(200)
		if self.get_argument('verbose', '0') == '1':
			self.write({'status': 'ok', 'sessions': self.application.tracker.pool.stats()})
		else:
			self.write("ok")
