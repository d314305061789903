"""sfr-sdk -- async Python clients for the SFR learning and token APIs.

Both SDKs share one request executor built on :mod:`httpx`. It injects the
bearer token and API key, retries server errors with capped exponential
backoff, and normalizes every failure into an
:class:`~sfr_sdk.exceptions.SfrError`.

Typical use::

    from sfr_sdk.learning import create_dev_sdk

    async with create_dev_sdk(token="jwt") as sdk:
        courses = await sdk.get_courses()

Modules:
    client: The shared :class:`~sfr_sdk.client.RequestExecutor`.
    learning: Learning spaces, content, evaluations and quizzes.
    crypto: Token balances, rewards, governance, plus validation and formatting helpers.
    config: Presets and layered configuration resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting and the request trace sink.
    app: The ``sfr-sdk`` command line.
"""

__version__ = "0.1.0"
