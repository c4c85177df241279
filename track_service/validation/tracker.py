# -*- coding: utf-8 -*-
"""Module with validations schemas for client tracker requests.
"""
import voluptuous as vlps

from track_service.modules.tracker.tracker import TRACKING_NUMBER_MAX_LENGTH

# Returned for any invalid TrackerHandler.post body.
USER_REQUEST_ERROR_MESSAGE = "Invalid request. 'tracking_number' field is required."

# Used to validate TrackerHandler.post request.
# Other fields are ignored.
USER_REQUEST_SCHEMA = vlps.Schema({
	vlps.Required('tracking_number'): vlps.All(
		str,
		vlps.Strip,
		vlps.Length(min=1, max=TRACKING_NUMBER_MAX_LENGTH)
	)
}, extra=vlps.REMOVE_EXTRA)
