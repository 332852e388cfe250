"""
Honeybadger notifier metadata.

This module defines the static block that identifies this client in every
notice it sends, along with the environment variables the configuration
layer reads.

The notifier block is constant across reports; it describes the reporter,
not the error.
"""

from __future__ import annotations

# Notifier identification
NOTIFIER_NAME = "Honeybadger Python Notifier"
NOTIFIER_URL = "https://github.com/webnuts/honeybadger-error-reporter"
NOTIFIER_VERSION = "1.0"

# Remote endpoint for notice delivery
NOTICES_URL = "https://api.honeybadger.io/v1/notices"

# Environment variables
# These are the environment variables HoneybadgerConfig.from_env() reads
ENV_VARS = {
    "HONEYBADGER_API_KEY": {
        "required": True,
        "description": "Project API key, sent as the X-API-Key header",
    },
    "HONEYBADGER_ENVIRONMENT_NAME": {
        "required": False,
        "description": "Environment name reported in server.environment_name",
    },
    "HONEYBADGER_PROJECT_ROOT": {
        "required": False,
        "description": "Application root reported in server.project_root.path (defaults to cwd)",
    },
    "HONEYBADGER_HOSTNAME": {
        "required": False,
        "description": "Hostname used when the request carries no SERVER_NAME",
    },
}


def get_metadata() -> dict:
    """
    Return the notifier block as a dictionary.

    This is the exact shape emitted under the ``notifier`` key.
    """
    return {
        "name": NOTIFIER_NAME,
        "url": NOTIFIER_URL,
        "version": NOTIFIER_VERSION,
    }
