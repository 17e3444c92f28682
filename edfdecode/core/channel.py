"""
EDFChannel holds the metadata of one signal of an EDF(+) file together with
its samples, stored record by record.

The channel sub-header publishes its layout in :data:`CHANNEL_FIELDS`. The
order of this table is the order in which the columns appear in the file.
"""

import logging
import math

import numpy as np
import quantities as pq

from .fields import Field, to_stripped, to_number, as_count

logger = logging.getLogger(__name__)

CHANNEL_FIELDS = [
    Field('label', to_stripped, 16),
    Field('transducer', to_stripped, 80),
    Field('physical_dimension', to_stripped, 8),
    Field('physical_min', to_number, 8),
    Field('physical_max', to_number, 8),
    Field('digital_min', to_number, 8),
    Field('digital_max', to_number, 8),
    Field('prefiltering', to_stripped, 80),
    Field('num_samples_per_record', to_number, 8),
    Field('reserved', to_stripped, 32),
]

# frequent spellings of physical dimensions in EDF files
unit_convert = {'uv': 'uV', 'UV': 'uV', 'mv': 'mV', 'MV': 'mV',
                'DegC': 'degC', '%': 'percent',
                # note that "micro" and "mu" are two different characters in Unicode
                # although they mostly look the same. Here we accept both.
                'µV': 'uV', 'μV': 'uV'}


def ensure_signal_units(units):
    units = units.replace(' ', '')
    if units in unit_convert:
        units = unit_convert[units]
    try:
        units = pq.Quantity(1, units)
    except Exception:
        logger.warning(f'Units "{units}" can not be converted to a quantity. Using dimensionless '
                       'instead')
        units = pq.Quantity(1, '')
    return units


class EDFChannel:
    """
    One signal of an EDF(+) file.

    The static fields are filled once while decoding the channel sub-header.
    The sample storage is allocated by :meth:`init` and every record is then
    filled exactly once with :meth:`set_record`.
    """

    fields = CHANNEL_FIELDS

    def __init__(self):
        for field in self.fields:
            setattr(self, field.name, None)
        self.records = []
        self.num_records = 0
        self.record_duration = None
        self.sampling_rate = None
        self._units = None

    def __repr__(self):
        return (f'<EDFChannel {self.label!r} {self.num_samples_per_record} samples/record '
                f'{self.physical_dimension!r}>')

    @property
    def gain(self):
        digital_range = self.digital_max - self.digital_min
        if digital_range == 0:
            return 1.
        return (self.physical_max - self.physical_min) / digital_range

    @property
    def offset(self):
        return self.physical_min - self.digital_min * self.gain

    @property
    def units(self):
        if self._units is None:
            self._units = ensure_signal_units(self.physical_dimension or '')
        return self._units

    def init(self, num_records, record_duration):
        """Allocate the per-record storage and derive the sampling rate."""
        self.num_records = num_records
        self.record_duration = record_duration
        self.records = [None] * num_records
        spr = as_count(self.num_samples_per_record)
        if record_duration and math.isfinite(record_duration):
            self.sampling_rate = spr / record_duration
        else:
            self.sampling_rate = 0.

    def set_record(self, record_index, samples):
        self.records[record_index] = np.asarray(samples, dtype=np.int16)

    def get_digital_samples(self):
        """Return all stored samples as one int16 array."""
        filled = [r for r in self.records if r is not None]
        if not filled:
            return np.zeros(0, dtype=np.int16)
        return np.concatenate(filled)

    def get_raw_bytes(self):
        """Return the stored samples as they were laid out in the file."""
        return self.get_digital_samples().astype('<i2').tobytes()

    def get_physical_samples(self, t0=0., dt=None, n=None):
        """
        Convert a window of samples to physical units.

        Parameters
        ----------
        t0: float, default: 0.
            Start of the window in seconds.
        dt: float | None, default: None
            Length of the window in seconds, ignored when ``n`` is given.
        n: int | None, default: None
            Number of samples in the window.

        Returns
        -------
        quantities.Quantity
            Samples in the channel units, clipped to the stored samples.
        """
        digital = self.get_digital_samples()
        rate = self.sampling_rate or 0.
        start = int(round(t0 * rate))
        if n is not None:
            stop = start + int(n)
        elif dt is not None and math.isfinite(dt) and rate:
            stop = start + int(round(dt * rate))
        else:
            stop = digital.size
        start = min(max(start, 0), digital.size)
        stop = min(max(stop, start), digital.size)

        physical = digital[start:stop].astype('float64') * self.gain + self.offset
        return physical * self.units
