"""Logging filter that keeps GitHub credentials out of log output.

Two kinds of values are redacted:

- secrets registered explicitly through :func:`register_secret` (the configured
  personal access token is registered by ``get_settings``), and
- anything shaped like a GitHub token (``ghp_``, ``gho_``, ``ghu_``, ``ghs_``,
  ``ghr_`` and fine-grained ``github_pat_`` tokens), so that tokens echoed back
  in error bodies or tracebacks are caught even when they were never registered.

Usage:
    >>> from github_releases_mcp.logging_security import install_filter, register_secret
    >>> install_filter()
    >>> register_secret("my-secret-token")
    >>> logging.info("Token: my-secret-token")  # Logs: Token: [REDACTED]
"""

import logging
import re
import threading
from types import TracebackType
from typing import Final

REDACTED: Final[str] = "[REDACTED]"

GITHUB_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\b(?:gh[pousr]_[A-Za-z0-9]{20,}|github_pat_[A-Za-z0-9_]{20,})\b"
)

_original_get_message = logging.LogRecord.getMessage
_original_format_exception = logging.Formatter.formatException


class SecretFilter(logging.Filter):
    """Redact registered secrets and GitHub-shaped tokens from log records."""

    def __init__(self) -> None:
        """Initialize the filter with an empty secrets registry."""
        super().__init__()
        self._secrets: set[str] = set()
        self._lock = threading.Lock()

    def register_secret(self, secret: str) -> None:
        """Add a value to redact. Empty strings are ignored."""
        if secret:
            with self._lock:
                self._secrets.add(secret)

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact the message, its string arguments and any cached traceback text.

        Always returns True: records are rewritten, never dropped.
        """
        if record.msg:
            record.msg = self.redact(str(record.msg))

        if isinstance(record.args, dict):
            record.args = {
                key: self.redact(value) if isinstance(value, str) else value
                for key, value in record.args.items()
            }
        elif isinstance(record.args, tuple):
            record.args = tuple(
                self.redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )

        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)

        return True

    def redact(self, text: str) -> str:
        """Return *text* with every known secret and token-shaped value replaced."""
        with self._lock:
            secrets = sorted(self._secrets, key=len, reverse=True)

        for secret in secrets:
            text = text.replace(secret, REDACTED)
        return GITHUB_TOKEN_PATTERN.sub(REDACTED, text)


_filter: SecretFilter | None = None
_pending_secrets: list[str] = []


def _redacting_get_message(self: logging.LogRecord) -> str:
    msg = _original_get_message(self)
    if _filter is not None:
        msg = _filter.redact(msg)
    return msg


def _redacting_format_exception(
    self: logging.Formatter,
    ei: tuple[type[BaseException], BaseException, TracebackType | None] | tuple[None, None, None],
) -> str:
    result = _original_format_exception(self, ei)
    if _filter is not None:
        result = _filter.redact(result)
    return result


def install_filter() -> SecretFilter:
    """Install the filter on the root logger (idempotent).

    Also patches ``LogRecord.getMessage`` and ``Formatter.formatException`` so
    that secrets interpolated at format time, or appearing in tracebacks, are
    redacted as well. Secrets registered before installation are applied now.

    Returns:
        The installed SecretFilter instance.
    """
    global _filter
    if _filter is None:
        _filter = SecretFilter()
        logging.getLogger().addFilter(_filter)

        logging.LogRecord.getMessage = _redacting_get_message  # type: ignore[method-assign]
        logging.Formatter.formatException = _redacting_format_exception  # type: ignore[method-assign]

        for secret in _pending_secrets:
            _filter.register_secret(secret)
        _pending_secrets.clear()

    return _filter


def register_secret(secret: str) -> None:
    """Register a secret to redact from all logs.

    Can be called before :func:`install_filter`; the secret is queued until the
    filter is installed.
    """
    if _filter is not None:
        _filter.register_secret(secret)
    elif secret:
        _pending_secrets.append(secret)
