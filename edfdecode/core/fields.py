"""
Fixed-width field codec for EDF(+) headers.

A header is described by an explicit, ordered list of :class:`Field`
entries. The order of the list is the byte layout: fields are sliced left to
right, each one consuming exactly ``width`` characters.

For the EDF(+) specification see:
https://www.edfplus.info/specs/index.html
"""

import datetime
import logging
import math
import re
from collections import namedtuple

logger = logging.getLogger(__name__)

Field = namedtuple('Field', ['name', 'coercion', 'width'])

_month_names = ['JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN',
                'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC']


def to_stripped(raw):
    return raw.strip()


def to_number(raw):
    """
    Parse a space padded ASCII number.

    Integral values are returned as int, other values as float and anything
    that cannot be parsed as ``nan``.
    """
    text = raw.strip()
    try:
        value = float(text)
    except ValueError:
        return math.nan
    if value.is_integer():
        return int(value)
    return value


def as_count(value):
    """Return ``value`` as a non negative int, 0 when it is not a finite number."""
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(int(value), 0)


def header_width(fields):
    return sum(field.width for field in fields)


def decode_fields(string, fields, start=0):
    """
    Slice ``string`` with the ordered ``fields`` table.

    Returns a dict name -> coerced value and the offset after the last field.
    Slices past the end of ``string`` are empty and coerce to '' or ``nan``.
    """
    values = {}
    for field in fields:
        end = start + field.width
        values[field.name] = field.coercion(string[start:end])
        start = end
    return values, start


def string_from_buffer(buffer, start, stop):
    """
    Decode ``buffer[start:stop]`` as header text.

    latin-1 maps every byte to exactly one character, so offsets in the
    returned string are byte offsets.
    """
    return bytes(buffer[start:stop]).decode('latin-1')


def parse_datetime(startdate, starttime, rid=''):
    """
    Combine the 'dd.mm.yy' and 'hh.mm.ss' header fields into a datetime.

    Two digit years follow the EDF clipping date: 85-99 are 1985-1999 and
    00-84 are 2000-2084. When the year is given as 'yy' (EDF+ files recorded
    after 2084) the year is taken from the 'Startdate dd-MMM-yyyy' subfield of
    the recording identification.

    Returns None when the fields cannot be parsed.
    """
    date_parts = re.findall(r'(\d+)', startdate)
    time_parts = re.findall(r'(\d+)', starttime)
    if len(time_parts) != 3:
        logger.warning(f'Can not parse start time "{starttime}"')
        return None

    if len(date_parts) == 2 and startdate.strip().endswith('yy'):
        year = _year_from_recording_id(rid)
        day, month = (int(v) for v in date_parts)
    elif len(date_parts) == 3:
        day, month, year = (int(v) for v in date_parts)
        year = 1900 + year if year >= 85 else 2000 + year
    else:
        year = None

    if year is None:
        logger.warning(f'Can not parse start date "{startdate}"')
        return None

    hour, minute, second = (int(v) for v in time_parts)
    try:
        return datetime.datetime(year, month, day, hour, minute, second)
    except ValueError as e:
        logger.warning(f'Invalid start date/time "{startdate} {starttime}": {e}')
        return None


def _year_from_recording_id(rid):
    subfields = rid.split()
    if len(subfields) < 2 or subfields[0] != 'Startdate':
        return None
    m = re.match(r'(\d{2})-([A-Z]{3})-(\d{4})$', subfields[1])
    if m is None or m.group(2) not in _month_names:
        return None
    return int(m.group(3))
