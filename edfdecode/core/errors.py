"""
Exceptions raised while decoding EDF(+) files.

Every error carries the values needed to build a diagnostic message, so
callers can inspect them instead of parsing the text.
"""


class EDFError(Exception):
    """Base class for all errors raised by edfdecode."""


class SizeMismatch(EDFError):
    """
    The number of samples in the data blob differs from the header.

    The decoding pipeline recovers from this condition on its own, see
    :class:`edfdecode.core.blobsize.BlobSize`.
    """

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        EDFError.__init__(self, f"Header implies {expected} samples; {actual} found.")


class UnsupportedOperation(EDFError):
    """The operation is not available for this kind of document."""

    def __init__(self, operation, edf_type):
        self.operation = operation
        self.edf_type = edf_type
        EDFError.__init__(self, f"{operation} is not supported for {edf_type} documents")


class UnknownChannel(EDFError, KeyError):
    """No channel with this label exists in the document."""

    def __init__(self, label):
        self.label = label
        EDFError.__init__(self, f"Unknown channel label {label!r}")

    def __str__(self):
        return self.args[0]
