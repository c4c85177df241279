#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Main module of the program, executable.

All options except --host/--port come from environment, see
track_service.environs.env. Logging is configured by tornado options
(--logging=debug, --log_file_prefix=...).
"""
import asyncio
import logging

from tornado.options import define, options, parse_command_line

from track_service.application import Application
from track_service.environs.env import ConfigError, load_config


define("host", default=None, help="bind to the given address", type=str)
define("port", default=None, help="run on the given port", type=int)

logger = logging.getLogger(__name__)


async def serve():
	"""Load config, start HTTP server and run forever."""
	try:
		config = load_config()
	except ConfigError as e:
		logger.error('Bad configuration: %s', e)
		raise SystemExit(1)

	host = options.host or config.host
	port = options.port or config.port

	server = Application(config)
	server.listen(port, address=host)
	logger.info(
		'Listening on %s:%d, carrier %s, up to %d browser sessions',
		host, port, config.carrier_url, config.max_sessions
	)
	await asyncio.Event().wait()


def main():
	"""Main function of the program."""
	parse_command_line()
	asyncio.run(serve())


if __name__ == "__main__":
	main()
