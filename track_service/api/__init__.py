# -*- coding: utf-8 -*-
from track_service.api import healthcheck, tracker, version
