# src/composer/errors.py


class ComposerError(Exception):
    """Base class for all errors raised by the composer core."""


class ConversionError(ComposerError):
    """
    Raised when a full-page conversion cannot produce a tree.

    Element-local failures never surface as this error; they are absorbed
    where they occur and replaced by an empty value.
    """
