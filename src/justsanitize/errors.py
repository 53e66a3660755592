"""Exceptions raised by justsanitize."""

from __future__ import annotations


class SanitizerError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(SanitizerError, ValueError):
    """The input could not be read as UTF-8 text."""


class ConfigError(SanitizerError, ValueError):
    """A whitelist builder operation was used against its contract.

    Raised when configuring attributes, hosts or values on a tag that is not
    allowed, or when trying to override one of the required node names.
    """
