# -*- coding: utf-8 -*-
"""Headless browser sessions and the bounded pool they are taken from.

Every request gets its own BrowserSession: a separate Playwright driver,
Chromium process, context and page. Sessions are never shared, the pool only
limits how many of them are alive at once.

Session lifecycle:
	pool admission (bounded wait) -> launch -> use -> close -> slot released
Close and slot release happen on every exit path, including cancellation.
"""
import asyncio
from contextlib import asynccontextmanager
import logging
from typing import AsyncIterator, Awaitable, Callable, Optional

from playwright.async_api import (
	Browser,
	BrowserContext,
	Error as PlaywrightError,
	Page,
	Playwright,
	async_playwright,
)

from track_service.environs.env import BrowserConfig
from track_service.modules.tracker.errors import Overloaded, SessionError


logger = logging.getLogger(__name__)


class BrowserSession:
	"""Exclusively owned browser handle.

	`page` is what carriers work with, everything else is kept only to be
	freed by close().
	"""
	def __init__(
		self,
		page: Page,
		context: Optional[BrowserContext] = None,
		browser: Optional[Browser] = None,
		playwright: Optional[Playwright] = None
	):
		self.page = page
		self._context = context
		self._browser = browser
		self._playwright = playwright
		self.closed = False

	async def close(self):
		"""Terminate browser and driver. Safe to call more than once."""
		if self.closed:
			return
		self.closed = True

		try:
			# Browser could be already dead, but everything after it still has
			# to be freed.
			for resource in (self._context, self._browser):
				if resource is None:
					continue
				try:
					await resource.close()
				except PlaywrightError as e:
					logger.warning('Failed to close %s: %s', type(resource).__name__, e)
		finally:
			if self._playwright is not None:
				await self._playwright.stop()


SessionLauncher = Callable[[BrowserConfig], Awaitable[BrowserSession]]


async def launch_session(config: BrowserConfig) -> BrowserSession:
	"""Start Playwright driver and Chromium, open a page.

	SessionError will be raised if the browser can't be started.
	"""
	playwright = None
	browser = None
	try:
		playwright = await async_playwright().start()
		browser = await playwright.chromium.launch(
			headless=config.headless,
			executable_path=config.executable_path,
			args=config.args,
			timeout=config.launch_timeout * 1000
		)
		context = await browser.new_context()
		page = await context.new_page()
	except PlaywrightError as e:
		await _cleanup(browser, playwright)
		raise SessionError(f'Can\'t start browser: {e}') from e
	except BaseException:
		# Cancelled while starting: don't leave orphaned processes.
		await _cleanup(browser, playwright)
		raise

	page.set_default_navigation_timeout(config.navigation_timeout * 1000)

	return BrowserSession(page, context=context, browser=browser, playwright=playwright)


async def _cleanup(browser: Optional[Browser], playwright: Optional[Playwright]):
	session = BrowserSession(page=None, browser=browser, playwright=playwright)
	await asyncio.shield(session.close())


class SessionPool:
	"""Limits number of simultaneously alive browser sessions.

	`max_sessions` - how many sessions may exist at once.
	`queue_timeout` - how long (seconds) a request may wait for a free slot
	before Overloaded is raised.
	`launcher` - coroutine function creating a session from BrowserConfig.
	"""
	def __init__(
		self,
		browser_config: BrowserConfig,
		max_sessions: int,
		queue_timeout: float,
		launcher: SessionLauncher = launch_session
	):
		if max_sessions < 1:
			raise ValueError('max_sessions should be positive')

		self.browser_config = browser_config
		self.max_sessions = max_sessions
		self.queue_timeout = queue_timeout
		self._launcher = launcher
		self._slots = asyncio.Semaphore(max_sessions)
		# Slots taken (sessions launching, alive or closing).
		self.active = 0
		# Requests waiting for a slot.
		self.waiting = 0

	def stats(self) -> dict:
		return {
			'max_sessions': self.max_sessions,
			'active': self.active,
			'waiting': self.waiting,
		}

	async def _take_slot(self):
		self.waiting += 1
		try:
			if not self._slots.locked():
				await self._slots.acquire()
			else:
				await asyncio.wait_for(self._slots.acquire(), timeout=self.queue_timeout)
		except asyncio.TimeoutError as e:
			raise Overloaded(
				f'No free browser session in {self.queue_timeout}s '
				f'({self.active} active, {self.waiting - 1} more waiting)'
			) from e
		finally:
			self.waiting -= 1

		self.active += 1

	def _release_slot(self):
		self.active -= 1
		self._slots.release()

	@asynccontextmanager
	async def session(self) -> AsyncIterator[BrowserSession]:
		"""Acquire a fresh session for exclusive use.

		Overloaded will be raised if no slot is freed within queue_timeout,
		SessionError if the browser can't be started.
		"""
		await self._take_slot()
		try:
			session = await self._launcher(self.browser_config)
			logger.debug('Browser session started (%d/%d)', self.active, self.max_sessions)
			try:
				yield session
			finally:
				# Shielded: caller cancellation must not interrupt cleanup.
				await asyncio.shield(session.close())
				logger.debug('Browser session closed')
		finally:
			self._release_slot()
