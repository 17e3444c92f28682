"""
EDFDocument decodes an EDF(+) file held in memory.

An EDF file is made of three regions:
  * a 256 bytes global header
  * a channel sub-header of ``num_header_bytes - 256`` bytes. It is laid out
    by column: the labels of all channels come first, then all transducers
    and so on.
  * the data blob: ``num_records`` records, each of them the concatenation of
    ``num_samples_per_record`` int16 samples of every channel, in channel order.

Decoding is a sequential pipeline::

    header -> channel table -> blob size check -> de-interleave

Usage:
    >>> from edfdecode import EDFDocument
    >>> doc = EDFDocument.from_buffer(open('file.edf', 'rb').read())
    >>> doc.type, doc.duration, doc.sampling_rate
    >>> data = doc.get_physical_samples(t0=10., dt=5., channel_labels=['EEG Fpz-Cz']).result()

For the EDF(+) specification see:
https://www.edfplus.info/specs/index.html
"""

import concurrent.futures
import datetime
import logging

import numpy as np

from edfdecode import logging_handler

from .annotations import parse_tal
from .blobsize import BlobSize
from .channel import EDFChannel
from .errors import UnknownChannel, UnsupportedOperation
from .fields import (Field, to_stripped, to_number, as_count, decode_fields,
                     header_width, string_from_buffer, parse_datetime)

HEADER_FIELDS = [
    Field('version', to_stripped, 8),
    Field('pid', to_stripped, 80),
    Field('rid', to_stripped, 80),
    Field('startdate', to_stripped, 8),
    Field('starttime', to_stripped, 8),
    Field('num_header_bytes', to_number, 8),
    Field('reserved', to_stripped, 44),
    Field('num_records', to_number, 8),
    Field('record_duration', to_number, 8),
    Field('num_channels', to_number, 4),
]

HEADER_BYTES = header_width(HEADER_FIELDS)
BYTES_PER_SAMPLE = 2

worker = concurrent.futures.ThreadPoolExecutor(max_workers=2, thread_name_prefix='edfdecode')


class EDFDocument:
    """
    Decoded content of one EDF(+) file.

    Parameters
    ----------
    annotation_label: str, default: 'EDF Annotations'
        Label of the channel holding the TALs of EDF+ files.
    """

    header_fields = HEADER_FIELDS

    def __init__(self, annotation_label='EDF Annotations'):
        # create a logger for the class
        fullname = self.__class__.__module__ + "." + self.__class__.__name__
        self.logger = logging.getLogger(fullname)
        # Create a logger for 'edfdecode' and add a handler to it if it doesn't have one already.
        # (it will also not add one if the root logger has a handler)
        corename = self.__class__.__module__.split(".")[0]
        corelogger = logging.getLogger(corename)
        rootlogger = logging.getLogger()
        if not corelogger.handlers and not rootlogger.handlers:
            corelogger.addHandler(logging_handler)

        self.annotation_label = annotation_label
        self.filename = None

        for field in self.header_fields:
            setattr(self, field.name, None)
        self.startdatetime = None

        self.channels = []
        self.channel_by_label = {}
        self.duration = None
        self.sampling_rate = None
        self.blob_size = None

    @classmethod
    def from_buffer(cls, buffer, header_only=False, **kargs):
        doc = cls(**kargs)
        return doc.read_buffer(buffer, header_only=header_only)

    def __repr__(self):
        txt = f"{self.__class__.__name__}: {self.filename or '<buffer>'}\n"
        txt += f"type: {self.type}\n"
        txt += f"num_records: {self.num_records} x {self.record_duration} s\n"
        labels = [c.label for c in self.channels]
        txt += f"channels ({len(labels)}): {labels}\n"
        return txt

    @property
    def type(self):
        """'EDF+C' or 'EDF+D' for EDF+ files, 'EDF' otherwise."""
        marker = (self.reserved or '')[:5]
        if marker in ('EDF+C', 'EDF+D'):
            return marker
        return 'EDF'

    def read_header_from_string(self, string):
        """Decode the 256 characters global header."""
        if len(string) < HEADER_BYTES:
            self.logger.warning(f"Header is {len(string)} bytes long, {HEADER_BYTES} expected. "
                                "Missing fields are left empty")
        values, _ = decode_fields(string, self.header_fields)
        for name, value in values.items():
            setattr(self, name, value)
        self.startdatetime = parse_datetime(self.startdate, self.starttime, self.rid)

    def read_channel_header_from_string(self, string):
        """
        Decode the channel sub-header.

        Each field of :data:`edfdecode.core.channel.CHANNEL_FIELDS` holds one
        value per channel before the next field starts, so fields are the
        outer loop and channels the inner one.
        """
        num_channels = as_count(self.num_channels)
        self.channels = [EDFChannel() for _ in range(num_channels)]
        start = 0
        for field in EDFChannel.fields:
            for channel in self.channels:
                end = start + field.width
                setattr(channel, field.name, field.coercion(string[start:end]))
                start = end

        self.channel_by_label = {}
        for channel in self.channels:
            if channel.label in self.channel_by_label:
                self.logger.warning(f"Duplicate channel label {channel.label!r}, "
                                    "only the last one is reachable by label")
            self.channel_by_label[channel.label] = channel

    def _samples_per_record(self):
        return sum(as_count(c.num_samples_per_record) for c in self.channels)

    def _samples_in_blob(self, buffer):
        num_bytes = len(buffer) - as_count(self.num_header_bytes)
        return max(num_bytes, 0) // BYTES_PER_SAMPLE

    def check_blob_size(self, buffer):
        """
        Compare the samples declared by the header with the samples present.

        Sets ``duration`` from the samples actually present and returns a
        :class:`BlobSize`. A mismatch is logged, it is up to the caller to
        decide whether it is fatal.
        """
        samples_per_record = self._samples_per_record()
        expected_samples = samples_per_record * as_count(self.num_records)
        samples_in_blob = self._samples_in_blob(buffer)
        if samples_per_record:
            self.duration = self.record_duration * samples_in_blob / samples_per_record
        else:
            self.duration = 0.
        self.blob_size = BlobSize(expected_samples, samples_in_blob)
        if not self.blob_size.ok:
            self.logger.warning(f"Header implies {expected_samples} samples; "
                                f"{samples_in_blob} found.")
        return self.blob_size

    def read_blob_from_buffer(self, buffer):
        """De-interleave the data records into the channels."""
        record_channel_map = [0]
        for c, channel in enumerate(self.channels):
            record_channel_map.append(
                record_channel_map[c] + as_count(channel.num_samples_per_record))
        samples_per_record = record_channel_map[len(self.channels)]

        blob_size = self.check_blob_size(buffer)
        if blob_size.ok:
            samples_in_blob = blob_size.actual
        else:
            # best effort with the samples present, duration is not recomputed
            samples_in_blob = self._samples_in_blob(buffer)
            self.logger.warning(f"Decoding {samples_in_blob} samples for {self.num_records} records")

        offset = as_count(self.num_header_bytes)
        blob = np.frombuffer(buffer, dtype='<i2', count=samples_in_blob,
                             offset=min(offset, len(buffer)))

        num_records = as_count(self.num_records)
        for channel in self.channels:
            channel.init(num_records, self.record_duration)
        for r in range(num_records):
            for c, channel in enumerate(self.channels):
                channel.set_record(r, blob[r * samples_per_record + record_channel_map[c]:
                                           r * samples_per_record + record_channel_map[c + 1]].copy())

        self.sampling_rate = {}
        for label, channel in self.channel_by_label.items():
            self.sampling_rate[label] = channel.sampling_rate

    def read_buffer(self, buffer, header_only=False):
        """
        Decode a whole EDF file held in ``buffer`` (bytes, bytearray or memoryview).

        With ``header_only`` the data blob is only checked, not decoded.
        Returns the document itself.
        """
        buffer = memoryview(buffer).cast('B')

        string = string_from_buffer(buffer, 0, HEADER_BYTES)
        self.read_header_from_string(string)
        self.channels = []
        self.channel_by_label = {}
        self.duration = None
        self.sampling_rate = None
        self.blob_size = None
        if as_count(self.num_channels) == 0:
            self.logger.debug("No channels in file, skip channel header and data")
            return self

        string = string_from_buffer(buffer, HEADER_BYTES, as_count(self.num_header_bytes))
        self.read_channel_header_from_string(string)

        if header_only:
            self.check_blob_size(buffer)
        else:
            self.read_blob_from_buffer(buffer)
        return self

    def _check_labels(self, channel_labels):
        if channel_labels is None:
            return list(self.channel_by_label.keys())
        for label in channel_labels:
            if label not in self.channel_by_label:
                raise UnknownChannel(label)
        return list(channel_labels)

    def _physical_samples(self, t0, dt, channel_labels, n):
        data = {}
        for label in channel_labels:
            data[label] = self.channel_by_label[label].get_physical_samples(t0, dt, n)
        return data

    def get_physical_samples(self, t0=0., dt=None, channel_labels=None, n=None):
        """
        Physical samples of a time window, for several channels.

        Parameters
        ----------
        t0: float, default: 0.
            Start of the window in seconds.
        dt: float | None, default: None
            Length of the window in seconds. When neither ``dt`` nor ``n`` is
            given the whole recording is returned.
        channel_labels: list[str] | None, default: None
            Channels to read, all channels when None.
        n: int | None, default: None
            Number of samples per channel, takes precedence over ``dt``.

        Returns
        -------
        concurrent.futures.Future
            Resolves once to a dict label -> quantities.Quantity. An unknown
            label resolves to :class:`UnknownChannel`.
        """
        if t0 is None:
            t0 = 0.
        if dt is None and n is None:
            dt = self.duration
        try:
            channel_labels = self._check_labels(channel_labels)
        except UnknownChannel as e:
            future = concurrent.futures.Future()
            future.set_exception(e)
            return future
        return worker.submit(self._physical_samples, t0, dt, channel_labels, n)

    def get_annotations(self):
        """
        Return the TALs of the annotation channel.

        Plain EDF files have no annotation channel and raise
        :class:`UnsupportedOperation`.
        """
        if self.type == 'EDF':
            raise UnsupportedOperation('annotations', self.type)
        if self.annotation_label not in self.channel_by_label:
            raise UnknownChannel(self.annotation_label)
        channel = self.channel_by_label[self.annotation_label]
        return parse_tal(channel.get_raw_bytes())

    def relative_date(self, milliseconds):
        """Datetime ``milliseconds`` after the start of the recording."""
        if self.startdatetime is None:
            raise UnsupportedOperation('relative_date', 'undated')
        return self.startdatetime + datetime.timedelta(milliseconds=milliseconds)

    def relative_time(self, milliseconds):
        """
        Timestamp in milliseconds since the epoch, ``milliseconds`` after the
        start of the recording. The start date/time is taken as UTC.
        """
        date = self.relative_date(milliseconds)
        return date.replace(tzinfo=datetime.timezone.utc).timestamp() * 1000.
