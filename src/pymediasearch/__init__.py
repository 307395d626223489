"""pymediasearch: an asynchronous client for the Pexels media-search API.

The package exposes its metadata from :mod:`pymediasearch.meta` and the Pexels
client from :mod:`pymediasearch.Pexels`. ``LOGGER`` is re-exported here for
callers that want to configure the package logger without reaching into
submodules.
"""

from .meta import LOGGER, NAME, VERSION

__all__ = (
    "LOGGER",
    "NAME",
    "VERSION",
)
