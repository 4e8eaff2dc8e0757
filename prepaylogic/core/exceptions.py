class PrepayError(Exception): ...


class CanonError(PrepayError): ...


class IngestError(PrepayError): ...


class ConfigError(PrepayError): ...


def require(condition: bool, message: str, exc: type[PrepayError] = PrepayError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
