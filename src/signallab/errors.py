"""Exceptions raised while turning user input into a :class:`Dataset`.

Everything here is a synchronous validation failure caused by a bad input
file. Analysis stages downstream of ingestion never raise these.
"""

from __future__ import annotations


class DatasetValidationError(ValueError):
    """Base class for input that cannot be turned into a dataset."""


class MissingChannelsError(DatasetValidationError):
    """JSON input has neither a ``channels`` list nor a root ``data`` array."""


class EmptyChannelError(DatasetValidationError):
    """A channel holds no finite numeric samples after coercion."""


class EmptyInputError(DatasetValidationError):
    """Delimited text contains no non-blank lines."""


class NoNumericValuesError(DatasetValidationError):
    """Delimited text has lines but none of them yield a finite number."""


class InvalidJsonError(DatasetValidationError):
    """A ``.json`` file could not be decoded into a JSON object."""


class InvalidEncodingError(DatasetValidationError):
    """An input file is not valid UTF-8 text."""


class ChannelNotFoundError(LookupError):
    """The requested channel id does not exist in the dataset."""


__all__ = [
    "DatasetValidationError",
    "MissingChannelsError",
    "EmptyChannelError",
    "EmptyInputError",
    "NoNumericValuesError",
    "InvalidJsonError",
    "InvalidEncodingError",
    "ChannelNotFoundError",
]
