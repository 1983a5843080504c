"""Errors raised while extracting business records."""


class RegistryParserError(Exception):
    """Base error for this package."""


class DecodeError(RegistryParserError):
    """Raised when the PDF cannot be decoded into a fragment stream."""
