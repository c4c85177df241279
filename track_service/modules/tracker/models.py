# -*- coding: utf-8 -*-
"""Tracking data structures.

Events are kept in the order the carrier reported them.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class TrackingRequest:
	tracking_number: str


@dataclass(frozen=True)
class TrackingEvent:
	timestamp: str
	location: str
	detail: str

	def to_response(self) -> dict:
		return {
			'date_time': self.timestamp,
			'area': self.location,
			'details': self.detail,
		}


@dataclass(frozen=True)
class TrackingResult:
	title: str
	header: tuple[str, ...]
	events: tuple[TrackingEvent, ...]

	def to_response(self) -> dict:
		"""Public JSON shape of the result."""
		return {
			'title': self.title,
			'header': list(self.header),
			'statuses': [event.to_response() for event in self.events],
		}
