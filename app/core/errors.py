"""Error kinds raised along the fetch, parse, cache and serve path."""


class SanctionsError(Exception):
    """Base class for every domain error of the service."""


class FetchError(SanctionsError):
    """Network failure, timeout or non-2xx response while downloading a list."""


class DecodeError(SanctionsError):
    """Raw bytes could not be decoded with the source's declared encoding."""


class ParseError(SanctionsError):
    """Malformed XML or a document that does not have the expected shape."""


class ValidationError(SanctionsError):
    """Invalid caller input (surfaced as HTTP 400)."""


class PersistenceError(SanctionsError):
    """Snapshot file could not be read or written. Never escapes the store."""


class DatasetUnavailableError(SanctionsError):
    """No snapshot was ever populated and an on-demand refresh failed too."""
