"""
:mod:`edfdecode.io` provides classes for loading EDF(+) files from disk.

Classes:

.. autoclass:: edfdecode.io.EDFIO
"""

from edfdecode.io.edfio import EDFIO
