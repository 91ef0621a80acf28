"""
Application-wide constants and configuration.

Persisted, user-editable values live in services/settings.py.  This module
only holds static constants and their environment overrides.
"""

import os


# ---------------------------------------------------------------------------
# Console metadata
# ---------------------------------------------------------------------------

CONSOLE_VERSION = "0.3.0"
APP_NAME = "Deployment Console"

# ---------------------------------------------------------------------------
# Console API (the relay backend the viewer talks to)
# ---------------------------------------------------------------------------

DEFAULT_API_URL = os.environ.get("DEVCONSOLE_API_URL", "http://127.0.0.1:8080")
ACCESS_TOKEN = os.environ.get("DEVCONSOLE_TOKEN", "")

WORKLOADS_PREFIX = "/api/workloads"
REST_TIMEOUT = 15  # seconds, per page request

# Go's zero time.Time – the provider sends it for lines without a timestamp
ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"

# ---------------------------------------------------------------------------
# Relay backend – upstream deployment-log provider
# ---------------------------------------------------------------------------

PROVIDER_API_URL = os.environ.get("DEVCONSOLE_PROVIDER_API_URL", "https://api.pulumi.com/api")
PROVIDER_TOKEN = os.environ.get("DEVCONSOLE_PROVIDER_TOKEN", "")
PROVIDER_ACCEPT = "application/vnd.pulumi+8"
PROVIDER_TIMEOUT = 30
STREAM_PAGE_DELAY = 1.0  # seconds between pages pushed over the socket
BACKEND_PORT = 8080

# ---------------------------------------------------------------------------
# UI constants
# ---------------------------------------------------------------------------

WINDOW_WIDTH = 950
WINDOW_HEIGHT = 620
CONSOLE_HEIGHT = 400
