"""
hdkeys: BIP32 hierarchical deterministic key trees

    -Derive private and public child keys from a seed or an extended key
    -Serialize and parse xprv/xpub extended keys
    -Parse and render derivation paths
"""
# hdkeys/__init__.py
from hdkeys.core import *
from hdkeys.cryptography import DEFAULT_CURVE, OpenSSLCurve, PythonCurve, get_curve
from hdkeys.data import *
from hdkeys.wallet import *

__version__ = "0.1.0"
