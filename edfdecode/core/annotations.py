"""
Parser for Time-stamped Annotation Lists (TALs), the content of the
"EDF Annotations" signal of EDF+ files.

A TAL is laid out as::

    +onset[\\x15duration]\\x14[text\\x14[text\\x14...]]\\x00

Onset and duration are in seconds, the onset is relative to the start of the
recording. The first TAL of every data record carries no text, its onset is
the start time of that data record.
"""

import re
from collections import namedtuple

TAL = namedtuple('TAL', ['onset', 'duration', 'annotations'])

_tal_regex = re.compile(
    r'(?P<onset>[+\-]\d+(?:\.\d*)?)'
    r'(?:\x15(?P<duration>\d+(?:\.\d*)?))?'
    r'(\x14(?P<annotation>[^\x00]*))?'
    r'(?:\x14\x00)'
)


def parse_tal(raw, encoding='utf-8'):
    """
    Parse the raw bytes of an annotation signal into a list of :class:`TAL`.

    ``duration`` is 0. when it is not given, ``annotations`` is the list of
    texts of the TAL (empty for timekeeping TALs).
    """
    if isinstance(raw, (bytes, bytearray, memoryview)):
        raw = bytes(raw).decode(encoding, errors='replace')

    tals = []
    for m in _tal_regex.finditer(raw):
        d = m.groupdict()
        annotations = d['annotation'].split('\x14') if d['annotation'] else []
        tals.append(TAL(float(d['onset']),
                        float(d['duration']) if d['duration'] else 0.,
                        annotations))
    return tals
