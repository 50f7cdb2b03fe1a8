"""Core Euclidean arithmetic: plain GCD and the fully traced Extended Euclidean Algorithm.

Implements the tabular Extended Euclidean Algorithm, recording every row of the derivation so that a caller can
display it step-by-step. The result carries the Bézout coefficients and, where one exists, the modular inverse
normalized to the range [0, m-1].

Typical usage example:

    gcd(48, 18)
    res = extended_euclidean(7, 26)
    res.normalized  # 15
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import typing

import structlog

logger = structlog.wrap_logger(logging.getLogger(__name__))


class Step(typing.NamedTuple):
    """One row of the Extended Euclidean Algorithm table.

    Attributes:
        step: Ordinal index of the row, row 0 being the initialization row.
        a: The dividend of the row.
        b: The divisor of the row.
        q: The quotient `a // b`. Zero for row 0.
        r: The remainder `a - q * b`. Equal to `a` for row 0.
        s: Bézout coefficient for the original dividend.
        t: Bézout coefficient for the original modulus.
    """
    step: int
    a: int
    b: int
    q: int
    r: int
    s: int
    t: int


class Bezout(typing.NamedTuple):
    """The Bézout coefficients such that `a*s + m*t = gcd(a, m)`."""
    s: int
    t: int


class CalculationResult(typing.NamedTuple):
    """Outcome of `extended_euclidean()`.

    Attributes:
        inverse: The raw modular inverse (Bézout coefficient `s`), None if `gcd != 1`.
        gcd: The greatest common divisor of `a` and `m`.
        steps: Every row of the algorithm, in order.
        bezout_identity: Coefficients satisfying `original_a*s + original_m*t == gcd`.
        normalized: The inverse reduced to [0, m-1], None if `gcd != 1`.
        original_a: `a` as it was given, not reduced.
        original_m: `m` as it was given.
    """
    inverse: int | None
    gcd: int
    steps: tuple[Step, ...]
    bezout_identity: Bezout
    normalized: int | None
    original_a: int
    original_m: int

    @property
    def has_inverse(self) -> bool:
        return self.gcd == 1


def gcd(a: int, b: int) -> int:
    """Plain Euclidean greatest common divisor.

    Sign-agnostic, absolute values are taken first. `gcd(0, 0)` is 0.

    Args:
        a: First integer.
        b: Second integer.

    Returns:
        The non-negative greatest common divisor of `a` and `b`.
    """
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def extended_euclidean(a: int, m: int) -> CalculationResult:
    """Runs the Extended Euclidean Algorithm on `a` and `m`, keeping the full trace.

    `a` is reduced into [0, m) first, then the remainders and both Bézout coefficient sequences are carried along
    as parallel recurrences. Row 0 records the seed values. The loop terminates since the remainder strictly
    decreases towards 0. Absence of an inverse is not an error, the trace and gcd are still returned.

    Args:
        a: The number to invert. Any sign, any size.
        m: The modulus. Must be positive.

    Returns:
        A `CalculationResult` with the full trace, gcd, Bézout identity and, if `gcd == 1`, the inverse.

    Raises:
        ValueError: If `m` is not positive.
    """
    if m <= 0:
        raise ValueError("Modulus must be a positive integer")
    original_a, original_m = a, m
    a = a % m
    old_r, r = a, m
    old_s, s = 1, 0
    old_t, t = 0, 1
    steps = [Step(0, old_r, r, 0, old_r, old_s, old_t)]
    while r != 0:
        q = old_r // r
        rem = old_r - q * r
        new_s = old_s - q * s
        new_t = old_t - q * t
        steps.append(Step(len(steps), old_r, r, q, rem, new_s, new_t))
        old_r, r = r, rem
        old_s, s = s, new_s
        old_t, t = t, new_t

    # The trace ran on the reduced a, so shift t to keep the identity exact for the original one.
    shift = (original_a - a) // m
    bezout = Bezout(old_s, old_t - shift * old_s)
    logger.debug("eea_complete", a=original_a, m=original_m, gcd=old_r, rows=len(steps))
    if old_r != 1:
        return CalculationResult(None, old_r, tuple(steps), bezout, None, original_a, original_m)
    return CalculationResult(old_s, old_r, tuple(steps), bezout, old_s % m, original_a, original_m)
