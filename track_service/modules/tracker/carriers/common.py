# -*- coding: utf-8 -*-
"""What every carrier scraper has to provide.

Orchestration code knows carriers only through Carrier.lookup(), so page
specific details (URLs, selectors) never leak outside carrier modules.
"""
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from track_service.modules.tracker.browser import BrowserSession


# Carrier column label -> cell text, for one row of the tracking table.
RawEvent = Mapping[str, str]


@dataclass(frozen=True)
class Selectors:
	"""CSS selectors of a carrier tracking page.

	`header_cell`, `row` and `cell` are relative: the first two to `result`,
	the last one to `row`.
	If `submit` is None, form is submitted by pressing Enter in `input`.
	"""
	input: str
	result: str
	not_found: str
	submit: Optional[str] = None
	header_cell: str = 'thead th'
	row: str = 'tbody tr'
	cell: str = 'td'


class Carrier(Protocol):
	async def lookup(self, session: BrowserSession, tracking_number: str) -> list[RawEvent]:
		"""Get tracking table rows in carrier-reported order.

		Should raise NotFound, TrackingTimeout, StructuralMismatch or
		SessionError, never return partial data.
		"""
		...
