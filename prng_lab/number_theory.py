"""Integer helpers behind the period theorems."""

import math
from typing import List

# Miller-Rabin with these bases is exact for n < 3.3 * 10^24 (about 2^81)
MILLER_RABIN_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

# Factors below this are stripped by trial division before Pollard rho
TRIAL_DIVISION_LIMIT = 1000


def gcd(a: int, b: int) -> int:
    return math.gcd(a, b)


def is_prime(n: int) -> bool:
    """Deterministic Miller-Rabin primality test."""
    if n < 2:
        return False
    for p in MILLER_RABIN_BASES:
        if n % p == 0:
            return n == p

    # n - 1 = d * 2^s with d odd
    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for a in MILLER_RABIN_BASES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def _pollard_rho(n: int) -> int:
    """A non-trivial divisor of the odd composite n."""
    c = 1
    while True:
        x = y = 2
        d = 1
        while d == 1:
            x = (x * x + c) % n
            y = (y * y + c) % n
            y = (y * y + c) % n
            d = math.gcd(x - y, n)
        if d != n:
            return d
        c += 1


def prime_factors(n: int) -> List[int]:
    """Distinct prime factors of n in ascending order (empty for n < 2)."""
    factors = set()
    if n < 2:
        return []

    d = 2
    while d < TRIAL_DIVISION_LIMIT and d * d <= n:
        if n % d == 0:
            factors.add(d)
            while n % d == 0:
                n //= d
        d += 1 if d == 2 else 2

    pending = [n] if n > 1 else []
    while pending:
        k = pending.pop()
        if k < TRIAL_DIVISION_LIMIT * TRIAL_DIVISION_LIMIT or is_prime(k):
            # every factor below the limit is gone, so k is prime here
            if k > 1:
                factors.add(k)
            continue
        divisor = _pollard_rho(k)
        pending.extend((divisor, k // divisor))

    return sorted(factors)


def is_primitive_root(a: int, p: int) -> bool:
    """
    True when a generates the multiplicative group modulo the prime p,
    i.e. a^((p-1)/q) != 1 (mod p) for every prime q dividing p-1.
    """
    if p == 2:
        return a % 2 == 1
    if a % p == 0:
        return False
    return all(pow(a, (p - 1) // q, p) != 1 for q in prime_factors(p - 1))


def multiplicative_order(a: int, p: int) -> int:
    """
    Order of a modulo the prime p (0 when a is a multiple of p).

    Starts from p-1 and strips each prime factor while a^order stays 1.
    """
    if a % p == 0:
        return 0
    order = p - 1
    for q in prime_factors(p - 1):
        while order % q == 0 and pow(a, order // q, p) == 1:
            order //= q
    return order
