# -*- coding: utf-8 -*-
"""Separate file for tracking exception classes to avoid circular import.

Every error knows which HTTP status it maps to and which message is safe to
show to the caller. Exception text itself is for logs only.
"""
import logging


class TrackingError(Exception):
	"""Base class for all tracking errors."""
	http_status = 500
	public_message = 'Internal Server Error'
	log_level = logging.ERROR


class NotFound(TrackingError):
	"""Carrier doesn't know the tracking number."""
	http_status = 404
	public_message = 'Failed to retrieve tracking data or ID not found.'
	log_level = logging.INFO


class TrackingTimeout(TrackingError):
	"""Carrier page didn't respond within configured bound."""
	http_status = 504
	public_message = 'Timed out while retrieving tracking data.'
	log_level = logging.WARNING


class StructuralMismatch(TrackingError):
	"""Carrier page markup doesn't match our selectors anymore."""
	http_status = 502
	public_message = 'Failed to retrieve tracking data from carrier.'
	log_level = logging.ERROR


class SessionError(TrackingError):
	"""Browser failed to start or crashed."""
	http_status = 502
	public_message = 'Failed to retrieve tracking data from carrier.'
	log_level = logging.ERROR


class Overloaded(TrackingError):
	"""No free browser session within queue timeout."""
	http_status = 503
	public_message = 'Service is busy, please try again later.'
	log_level = logging.WARNING
