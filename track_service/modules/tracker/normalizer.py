# -*- coding: utf-8 -*-
"""Turns raw scraped rows into TrackingResult. No I/O here."""
import re
from typing import Iterable, Mapping

from track_service.modules.tracker.errors import StructuralMismatch
from track_service.modules.tracker.models import TrackingEvent, TrackingResult


DEFAULT_HEADER = ('Date', 'Location', 'Status')

# Carrier column label (lowercase) -> TrackingEvent field.
# Order of DEFAULT_HEADER corresponds to ('timestamp', 'location', 'detail').
_FIELD_ALIASES = {
	'timestamp': ('date', 'date/time', 'date & time', 'datetime', 'date_time', 'time'),
	'location': ('location', 'area', 'place', 'city'),
	'detail': ('status', 'details', 'detail', 'description', 'event'),
}

_SPACES = re.compile(r'\s+')


def _clean(text) -> str:
	return _SPACES.sub(' ', str(text)).strip()


def _to_event(index: int, raw_event: Mapping[str, str]) -> TrackingEvent:
	cells = {_clean(label).lower(): _clean(value) for label, value in raw_event.items()}

	values = {}
	matched = {}
	for field_name, aliases in _FIELD_ALIASES.items():
		for alias in aliases:
			if alias in cells:
				values[field_name] = cells[alias]
				matched[field_name] = alias
				break
		else:
			raise StructuralMismatch(
				f'Row {index}: no column for {field_name!r}, got {sorted(cells)}'
			)

	# Some carriers split date and time into two columns.
	if matched['timestamp'] != 'time' and cells.get('time'):
		values['timestamp'] = f"{values['timestamp']} {cells['time']}"

	return TrackingEvent(**values)


def normalize(
	tracking_number: str,
	raw_events: Iterable[Mapping[str, str]],
	header: tuple[str, ...] = DEFAULT_HEADER
) -> TrackingResult:
	"""Build TrackingResult from rows as the carrier reported them.

	`raw_events` - carrier column label -> cell text, one mapping per row.
	`header` - column names to report, regardless of carrier column order.

	StructuralMismatch will be raised if any row lacks one of the fields.
	"""
	events = tuple(_to_event(i, raw_event) for i, raw_event in enumerate(raw_events))

	return TrackingResult(
		title=f'Tracking Result for {tracking_number}',
		header=tuple(header),
		events=events
	)
