# -*- coding: utf-8 -*-
"""'Externally' adjustable config vars.

Nothing here is read at import time: entry point calls load_config() once and
passes the resulting Config to everything that needs it.
"""
from dataclasses import dataclass, field
import os
from typing import Mapping, Optional

import voluptuous as vlps


class ConfigError(Exception):
	"""Environment doesn't describe a usable configuration."""
	pass


@dataclass(frozen=True)
class BrowserConfig:
	"""How to start the headless browser. Timeouts are in seconds."""
	headless: bool = True
	executable_path: Optional[str] = None
	# Chromium sandbox usually can't work for root inside containers/VPS.
	no_sandbox: bool = True
	launch_args: tuple[str, ...] = ()
	launch_timeout: float = 30.0
	navigation_timeout: float = 30.0

	@property
	def args(self) -> list[str]:
		"""Full list of command line flags for the browser process."""
		args = []
		if self.no_sandbox:
			args += ['--no-sandbox', '--disable-setuid-sandbox']
		args.extend(arg for arg in self.launch_args if arg not in args)
		return args


@dataclass(frozen=True)
class Config:
	carrier_url: str
	host: str = '127.0.0.1'
	port: int = 5000
	browser: BrowserConfig = field(default_factory=BrowserConfig)
	# How long to wait for the carrier to show results after submit.
	result_timeout: float = 15.0
	# Session pool.
	max_sessions: int = 2
	queue_timeout: float = 10.0
	# Extra attempts for timeouts and browser failures.
	lookup_retries: int = 0
	tracking_number_default_value: str = ''


def _flag(value) -> bool:
	return bool(int(value))


def _split_args(value: str) -> tuple[str, ...]:
	return tuple(arg.strip() for arg in value.split(',') if arg.strip())


_Seconds = vlps.All(vlps.Coerce(float), vlps.Range(min=0, min_included=False))

# All env values are strings, so everything should be coerced.
_ENV_SCHEMA = vlps.Schema({
	vlps.Required('CARRIER_URL'): vlps.All(str, vlps.Strip, vlps.Url()),
	vlps.Optional('HOST', default='127.0.0.1'): vlps.All(str, vlps.Length(min=1)),
	vlps.Optional('PORT', default='5000'): vlps.All(vlps.Coerce(int), vlps.Range(min=1, max=65535)),
	vlps.Optional('BROWSER_EXECUTABLE_PATH', default=''): str,
	vlps.Optional('BROWSER_HEADLESS', default='1'): vlps.Coerce(_flag),
	vlps.Optional('BROWSER_NO_SANDBOX', default='1'): vlps.Coerce(_flag),
	vlps.Optional('BROWSER_LAUNCH_ARGS', default=''): vlps.All(str, _split_args),
	vlps.Optional('BROWSER_LAUNCH_TIMEOUT', default='30'): _Seconds,
	vlps.Optional('NAVIGATION_TIMEOUT', default='30'): _Seconds,
	vlps.Optional('RESULT_TIMEOUT', default='15'): _Seconds,
	vlps.Optional('MAX_SESSIONS', default='2'): vlps.All(vlps.Coerce(int), vlps.Range(min=1)),
	vlps.Optional('SESSION_QUEUE_TIMEOUT', default='10'): vlps.All(vlps.Coerce(float), vlps.Range(min=0)),
	vlps.Optional('LOOKUP_RETRIES', default='0'): vlps.All(vlps.Coerce(int), vlps.Range(min=0, max=5)),
	vlps.Optional('TRACKING_NUMBER_DEFAULT_VALUE', default=''): str,
}, extra=vlps.REMOVE_EXTRA)


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
	"""Build Config from environment variables (os.environ by default).

	ConfigError will be raised if some variable is missing or invalid.
	"""
	if environ is None:
		environ = os.environ

	try:
		values = _ENV_SCHEMA(dict(environ))
	except vlps.MultipleInvalid as e:
		raise ConfigError(
			'; '.join(f"{error.path[0] if error.path else '?'}: {error.msg}" for error in e.errors)
		) from e

	browser = BrowserConfig(
		headless=values['BROWSER_HEADLESS'],
		executable_path=values['BROWSER_EXECUTABLE_PATH'] or None,
		no_sandbox=values['BROWSER_NO_SANDBOX'],
		launch_args=values['BROWSER_LAUNCH_ARGS'],
		launch_timeout=values['BROWSER_LAUNCH_TIMEOUT'],
		navigation_timeout=values['NAVIGATION_TIMEOUT'],
	)

	return Config(
		carrier_url=values['CARRIER_URL'],
		host=values['HOST'],
		port=values['PORT'],
		browser=browser,
		result_timeout=values['RESULT_TIMEOUT'],
		max_sessions=values['MAX_SESSIONS'],
		queue_timeout=values['SESSION_QUEUE_TIMEOUT'],
		lookup_retries=values['LOOKUP_RETRIES'],
		tracking_number_default_value=values['TRACKING_NUMBER_DEFAULT_VALUE'],
	)
