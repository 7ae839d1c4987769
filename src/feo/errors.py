"""Exceptions raised while collecting system metrics."""


class FeoError(Exception):
    """Base class for every feo error."""


class SourceUnavailable(FeoError):
    """A kernel text source or external command could not be read or run."""


class ParseError(FeoError):
    """An expected key or token was missing or not numeric."""


class EncodingError(FeoError):
    """External command output was not valid text."""
