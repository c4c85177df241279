# -*- coding: utf-8 -*-
"""Tornado application: routes and shared objects for handlers."""
from typing import Optional

import tornado.web

import track_service
from track_service import api
from track_service.environs.env import Config
from track_service.modules.tracker.tracker import Tracker


# pylint: disable=bad-whitespace
handlers = [
	(r"/api/healthcheck",                           api.healthcheck.HealthCheckHandler),
	(r"/api/version",                               api.version.VersionHandler),

	# API
	(r"/track",                                     api.tracker.TrackerHandler),
]
# pylint: enable=bad-whitespace


class Application(tornado.web.Application):
	"""Main application class.

	`tracker` may be passed to replace the browser-backed one (tests do so).
	"""
	service_name = 'track-service'

	def __init__(self, config: Config, tracker: Optional[Tracker] = None, **settings):
		self.config = config
		self.tracker = tracker or Tracker.from_config(config)
		self.version = track_service.__version__

		super().__init__(handlers, **settings)
