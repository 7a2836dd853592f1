"""
Elliptic curve cryptography and hash functions
"""
# cryptography/__init__.py
from hdkeys.cryptography.adapters import *
from hdkeys.cryptography.ecc import *
from hdkeys.cryptography.hash_functions import *
from hdkeys.cryptography.scalar import *
