"""
Result of checking the data blob of an EDF file against its header.
"""

from collections import namedtuple

from .errors import SizeMismatch


class BlobSize(namedtuple('BlobSize', ['expected', 'actual'])):
    """
    Number of samples the header declares (``expected``) and the number of
    samples present in the buffer (``actual``).
    """

    __slots__ = ()

    @property
    def ok(self):
        return self.expected == self.actual

    def raise_for_mismatch(self):
        if not self.ok:
            raise SizeMismatch(self.expected, self.actual)
        return self.actual
