'''
edfdecode is a package for decoding European Data Format (EDF and EDF+)
recordings held in memory into per-channel, per-record sample arrays
'''
import logging

from edfdecode.version import version as __version__

logging_handler = logging.StreamHandler()

from edfdecode.core import *
from edfdecode.io import *
