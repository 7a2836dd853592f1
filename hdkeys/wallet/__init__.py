"""
The key tree: derivation paths and extended keys
"""
# wallet/__init__.py
from hdkeys.wallet.derivation import *
from hdkeys.wallet.xkeys import *
