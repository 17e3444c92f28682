"""
IO for loading EDF and EDF+ files from disk into an EDFDocument.

The file is read into memory in one go and handed over to
:class:`edfdecode.core.EDFDocument`, which only works on buffers.

EDF Format Specifications: https://www.edfplus.info/
"""

import logging
from pathlib import Path

from edfdecode import logging_handler
from edfdecode.core.document import EDFDocument, worker


class EDFIO:
    """
    Class for loading European Data Format files (EDF and EDF+).

    Parameters
    ----------
    filename: str | Path
        The *.edf file to be loaded
    header_only: bool, default: False
        Only decode the header and the channel table, not the data records

    Usage:
        >>> from edfdecode.io import EDFIO
        >>> doc = EDFIO('file.edf').read_document()
        >>> future = EDFIO('file.edf').read_document_async()
        >>> doc = future.result()
    """

    def __init__(self, filename='', header_only=False):
        fullname = self.__class__.__module__ + "." + self.__class__.__name__
        self.logger = logging.getLogger(fullname)
        corelogger = logging.getLogger(self.__class__.__module__.split(".")[0])
        if not corelogger.handlers and not logging.getLogger().handlers:
            corelogger.addHandler(logging_handler)

        self.filename = str(filename)
        self.header_only = header_only

    def __repr__(self):
        return f"{self.__class__.__name__}: {self.filename}"

    def read_buffer(self):
        """Return the content of the file as bytes."""
        path = Path(self.filename)
        if not path.is_file():
            raise FileNotFoundError(f"File '{self.filename}' not found!")
        self.logger.debug(f"Reading {path}")
        return path.read_bytes()

    def read_document(self, **kargs):
        """Load and decode the file, keyword arguments go to EDFDocument."""
        doc = EDFDocument(**kargs)
        doc.filename = self.filename
        return doc.read_buffer(self.read_buffer(), header_only=self.header_only)

    def read_document_async(self, **kargs):
        """
        Same as :meth:`read_document` but returns a concurrent.futures.Future
        resolved once with the document, or with the error raised while
        loading.
        """
        return worker.submit(self.read_document, **kargs)
