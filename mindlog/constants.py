"""Shared constants for MindLog calendar export."""

APP_NAME = "MindLog"

# Identifier domain appended to event ids to build globally unique UIDs
UID_DOMAIN = "mindlog.app"

# VCALENDAR header values
PRODUCT_ID = "-//MindLog//MindLog Calendar//EN"
CALENDAR_NAME = "MindLog Schedule"

# Export file
ICS_MIME_TYPE = "text/calendar"
ICS_EXTENSION = "ics"

# Durable store
STORE_FILENAME = "mindlog_events.json"
STORE_KEY = "events"
