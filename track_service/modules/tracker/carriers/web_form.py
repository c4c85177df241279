# -*- coding: utf-8 -*-
"""Scraper for carriers with a plain "enter tracking number" web form.

Flow: open carrier page, fill the tracking number, submit, wait until either
results table or "not found" message shows up, read the table.
All waits are bounded; there are no fixed sleeps.
"""
import logging

from playwright.async_api import Error as PlaywrightError, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from track_service.modules.tracker.browser import BrowserSession
from track_service.modules.tracker.carriers.common import RawEvent, Selectors
from track_service.modules.tracker.errors import (
	NotFound,
	SessionError,
	StructuralMismatch,
	TrackingError,
	TrackingTimeout,
)


logger = logging.getLogger(__name__)


# Update these when carrier changes its page.
DEFAULT_SELECTORS = Selectors(
	input='input[name="tracking_number"]',
	submit='button[type="submit"]',
	result='#tracking-result table',
	not_found='#tracking-not-found',
)


class WebFormCarrier:
	"""Carrier scraper driven by Selectors.

	`url` - tracking page of the carrier.
	`result_timeout` - seconds to wait for the page to react to submit.
	"""
	def __init__(self, url: str, result_timeout: float, selectors: Selectors = DEFAULT_SELECTORS):
		self.url = url
		self.result_timeout = result_timeout
		self.selectors = selectors

	@property
	def _timeout_ms(self) -> float:
		return self.result_timeout * 1000

	async def lookup(self, session: BrowserSession, tracking_number: str) -> list[RawEvent]:
		"""Get tracking table rows for `tracking_number`.

		Driver errors are translated: timeouts into TrackingTimeout, anything
		else (crashed browser, closed page) into SessionError.
		"""
		try:
			return await self._lookup(session.page, tracking_number)
		except TrackingError:
			raise
		except PlaywrightTimeoutError as e:
			raise TrackingTimeout(f'{self.url}: {e}') from e
		except PlaywrightError as e:
			raise SessionError(f'{self.url}: {e}') from e

	async def _lookup(self, page: Page, tracking_number: str) -> list[RawEvent]:
		sel = self.selectors

		await page.goto(self.url, wait_until='domcontentloaded')
		await self._submit(page, tracking_number)

		try:
			await page.wait_for_selector(
				f'{sel.result}, {sel.not_found}',
				state='visible',
				timeout=self._timeout_ms
			)
		except PlaywrightTimeoutError as e:
			raise TrackingTimeout(
				f'No result for {tracking_number!r} in {self.result_timeout}s'
			) from e

		if await page.locator(sel.not_found).first.is_visible():
			raise NotFound(f'Carrier reports {tracking_number!r} as unknown')

		return await self._read_table(page, tracking_number)

	async def _submit(self, page: Page, tracking_number: str):
		sel = self.selectors

		try:
			tracking_input = await page.wait_for_selector(
				sel.input,
				state='visible',
				timeout=self._timeout_ms
			)
		except PlaywrightTimeoutError as e:
			raise StructuralMismatch(f'Tracking input {sel.input!r} not found') from e

		await tracking_input.fill(tracking_number)

		if sel.submit is None:
			await tracking_input.press('Enter')
			return

		submit = await page.query_selector(sel.submit)
		if submit is None:
			raise StructuralMismatch(f'Submit button {sel.submit!r} not found')
		await submit.click()

	async def _read_table(self, page: Page, tracking_number: str) -> list[RawEvent]:
		sel = self.selectors
		table = page.locator(sel.result).first

		header = [label.strip() for label in await table.locator(sel.header_cell).all_inner_texts()]
		if not header or not all(header):
			raise StructuralMismatch(f'Bad result header {header!r} ({sel.header_cell!r})')

		raw_events = []
		for index, row in enumerate(await table.locator(sel.row).all()):
			cells = await row.locator(sel.cell).all_inner_texts()
			if len(cells) != len(header):
				raise StructuralMismatch(
					f'Row {index} has {len(cells)} cells, header has {len(header)}'
				)
			raw_events.append(dict(zip(header, cells)))

		if not raw_events:
			raise NotFound(f'Carrier shows no events for {tracking_number!r}')

		logger.debug('%d events for %r', len(raw_events), tracking_number)
		return raw_events

