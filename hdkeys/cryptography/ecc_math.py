"""
Helper functions for the mathematics of elliptic curves
"""

__all__ = ["is_quadratic_residue", "sqrt_mod"]


def is_quadratic_residue(n: int, p: int) -> bool:
    """
    Returns True if (n|p) != -1 using Euler's criterion. (We include 0 as quadratic residues.)
    """
    n = n % p
    if n == 0:
        return True
    return pow(n, (p - 1) >> 1, p) == 1


def sqrt_mod(n: int, p: int) -> int:
    """
    Assuming n is a quadratic residue mod p, we return an integer r such that r^2 = n (mod p).

    Only primes p = 3 (mod 4) are supported, which covers secp256k1. In that case r = n^((p+1)/4) (mod p).
    """
    if p & 3 != 3:
        raise ValueError("sqrt_mod only supports primes congruent to 3 mod 4")

    n = n % p
    if not is_quadratic_residue(n, p):
        raise ValueError("sqrt_mod called on quadratic non-residue")

    return pow(n, (p + 1) >> 2, p)
