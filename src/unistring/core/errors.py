"""Exceptions raised by unistring operations."""


class ArgumentError(ValueError):
    """Raised when an operation receives a structurally invalid argument.

    Malformed encodings and out-of-range logical indices never raise; this
    covers caller mistakes such as bad ``insert_replaced`` offsets, a
    non-positive ``parts`` count or an unknown trait name.
    """

    pass
