"""Error kinds raised by the scraping pipeline."""


class ScraperError(Exception):
    """Base class for scraper failures."""


class TransportError(ScraperError):
    """Network, DNS, TLS or HTTP status failure talking to the site."""


class AuthenticationFailure(ScraperError):
    """The login handshake did not end in a redirect."""


class ParseError(ScraperError):
    """Markup could not be parsed into a document."""


class CacheIOError(ScraperError):
    """A cache or registry file could not be read or written."""


class ValidationError(ScraperError):
    """Required user fields are missing."""


class UserAlreadyExistsError(ValidationError):
    """A user with the same username is already registered."""
