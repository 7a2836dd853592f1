"""
All methods for encoding key data and looking up network version bytes
"""
# data/__init__.py
from hdkeys.data.codec import *
from hdkeys.data.ecc_keys import *
from hdkeys.data.networks import *
