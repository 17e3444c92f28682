"""
:mod:`edfdecode.core` provides the objects decoding an EDF(+) file held in
memory.

Classes:

.. autoclass:: EDFDocument
.. autoclass:: EDFChannel
.. autoclass:: BlobSize
.. autoclass:: TAL

Exceptions:

.. autoclass:: EDFError
.. autoclass:: SizeMismatch
.. autoclass:: UnsupportedOperation
.. autoclass:: UnknownChannel
"""

from edfdecode.core.errors import EDFError, SizeMismatch, UnsupportedOperation, UnknownChannel
from edfdecode.core.blobsize import BlobSize
from edfdecode.core.channel import EDFChannel, CHANNEL_FIELDS
from edfdecode.core.annotations import TAL, parse_tal
from edfdecode.core.document import EDFDocument, HEADER_FIELDS

