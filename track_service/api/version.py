# -*- coding: utf-8 -*-
"""Module with handler that reports which service build is running.
"""
from track_service.base_handler import BaseHandler


class VersionHandler(BaseHandler):
	def get(self):
		"""Return service name and current version."""
		self.write({"name": self.application.service_name, "version": self.application.version})
