# -*- coding: utf-8 -*-
"""Common module for all handlers in track_service.api, providing a BaseHandler
class that all handlers should inherit from as well as ApplicationError class.
"""
import json

from tornado import escape
import tornado.web
import voluptuous as vlps


__all__ = ('ApplicationError', 'BaseHandler')


class ApplicationError(tornado.web.HTTPError):
	"""An override of a standard tornado HTTPError class for custom handling."""

	def __init__(self, status_code: int, message: str, *args, **kwargs):
		self.message = message
		super().__init__(status_code, *args, reason=message, **kwargs)


# pylint: disable=abstract-method
class BaseHandler(tornado.web.RequestHandler):
	"""Base API class for all endpoints.

	Inherit from this if you want to create a new handler.
	"""
	def write(self, chunk):
		"""Overload of Tornado RequestHandler.write().

		Dicts are sent as compact JSON.
		"""
		if isinstance(chunk, dict):
			chunk = json.dumps(
				chunk,
				separators=(',', ':')
			).replace("</", "<\\/")

			self.set_header("Content-Type", "application/json; charset=UTF-8")

		super().write(chunk)

	def write_error(self, status_code, **kwargs):
		"""Send error response to client based on HTTPError-derived exception.

		NOTE:
		This should not be called directly.

		Allows to easily report errors via ApplicationError, specifying desired
		code and message. Tornado catches all HTTPError-derived exceptions and
		feeds to this class. Any other exception ends up here as 500 with
		standard reason, so internal details never reach the client.
		"""
		try:
			message = kwargs["exc_info"][1].message
		except (KeyError, IndexError, AttributeError):
			message = self._reason

		self.set_status(status_code)
		self.finish({'error': message})

	def parse_json(self, json_: str = None, custom_message: str = None):
		"""Parses data from json: either given string or self.request.body.

		Empty or malformed JSON gives 400 with `custom_message` if it is set.
		"""
		if not json_:
			json_ = self.request.body

		try:
			request = escape.json_decode(json_)
		except ValueError as e:
			message = "Bad JSON in request body" if custom_message is None else custom_message
			raise ApplicationError(status_code=400, message=message) from e

		return request

	def validate(
		self,
		schema: vlps.Schema,
		data=None,
		http_error_code: int = 400,
		custom_message: str = None
	):
		"""Validates `data` according to Voluptuous `schema`.

		If `data` is None then request body will be used.
		`data` will be checked for compliance with the `schema`. New constructed
		object will be returned. `schema` may contain transform instructions, so
		the returned object may be different from the original `data`.

		In case of validation error ApplicationError with given error_code
		will be raised with given message or validator message by default.
		"""
		if not isinstance(http_error_code, int):
			raise TypeError("http_error_code should be integer")

		# Validate HTTP error code
		if http_error_code < 400 or http_error_code >= 600:
			raise ValueError("http_error_code should be in range [400, 600)")

		if data is None:
			data = self.parse_json(custom_message=custom_message)

		try:
			data = schema(data)
		except vlps.Error as e:
			message = str(e) if custom_message is None else custom_message
			raise ApplicationError(
				status_code=http_error_code,
				message=message
			) from e

		# Validated data
		return data
