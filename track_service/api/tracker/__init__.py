# -*- coding: utf-8 -*-
from track_service.api.tracker.tracker import TrackerHandler
