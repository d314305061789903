"""Numeric process exit codes used by the ``sfr-sdk`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~sfr_sdk.exceptions.SfrError` subclass.
Shell scripts wrapping the CLI can inspect the exit code to determine the
failure class without parsing stderr.

Example::

    $ sfr-sdk health --env production
    $ echo $?
    8   # EXIT_HEALTH_CHECK_FAILED -- the API did not answer /health
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or failed input validation."""

EXIT_AUTH_FAILURE = 3
"""Authentication or authorisation failed (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an HTTP 5xx server error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_CLIENT_ERROR = 7
"""The remote API rejected the request with a 4xx status other than 401/403/404."""

EXIT_HEALTH_CHECK_FAILED = 8
"""The API health probe failed."""
