class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class ConfigError(DomainError):
    """A required secret (e.g. the token signing secret) is not configured."""

    pass


class InvalidToken(DomainError):
    """Token rejected by verification. Callers must not tell the subclasses apart to users."""

    pass


class MalformedToken(InvalidToken):
    """Token does not have the `<expiresAt>.<signature>` shape."""

    pass


class TokenExpired(InvalidToken):
    """Deadline passed or the signature does not match."""

    pass


class StorageUnavailable(DomainError):
    """The durable quota store could not be read or written."""

    pass
