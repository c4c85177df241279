# -*- coding: utf-8 -*-
"""Tracking lookup service: scrapes carrier tracking pages with a headless browser."""
__version__ = '1.0.0'
