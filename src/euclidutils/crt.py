"""Chinese Remainder Theorem solver for systems of linear congruences, with a full derivation trace.

Solves systems of the form `b_i * x ≡ a_i (mod m_i)` over pairwise coprime moduli. Each equation is first brought
into the canonical `x ≡ a' (mod m)` form by inverting its coefficient with the Extended Euclidean Algorithm, then
the classical `M_i * (M_i^-1 mod m_i)` construction combines them. Every intermediate value is kept for display.

Typical usage example:

    parsed = parse_crt_equations([CRTEquation("", "2", "3"), CRTEquation("", "3", "5")])
    res = solve_crt(parsed.equations)
    verify_crt_solution(res.solution, parsed.equations)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Sequence
import logging
import math
import typing

import structlog

from euclidutils.euclid import CalculationResult
from euclidutils.euclid import extended_euclidean
from euclidutils.euclid import gcd
from euclidutils.validators import parse_integer

logger = structlog.wrap_logger(logging.getLogger(__name__))


class CRTEquation(typing.NamedTuple):
    """A raw congruence row `b*x ≡ a (mod m)` as typed by the user. A blank `b` means 1."""
    b: str
    a: str
    m: str


class ParsedCRTEquation(typing.NamedTuple):
    """A validated congruence `b*x ≡ a (mod m)` with `b != 0` and `m > 1`."""
    b: int
    a: int
    m: int


class SimpleCongruence(typing.NamedTuple):
    """A congruence in canonical form `x ≡ a (mod m)`."""
    a: int
    m: int


class TransformedEquation(typing.NamedTuple):
    original: ParsedCRTEquation
    b_inverse: CalculationResult
    transformed: SimpleCongruence


class CRTStep(typing.NamedTuple):
    """The aggregate trace of the combination phase.

    Attributes:
        M: Product of all moduli.
        equations: The simplified congruences, one per original equation.
        Mi: `M // m_i` per equation.
        Mi_inverses: Inverse of `Mi mod m_i` modulo `m_i` per equation.
        inverse_calculations: The full EEA trace behind each entry of `Mi_inverses`.
        terms: `a_i * Mi * Mi_inverse` per equation.
    """
    M: int
    equations: tuple[SimpleCongruence, ...]
    Mi: tuple[int, ...]
    Mi_inverses: tuple[int, ...]
    inverse_calculations: tuple[CalculationResult, ...]
    terms: tuple[int, ...]


class CRTResult(typing.NamedTuple):
    solution: int
    modulus: int
    transformed_equations: tuple[TransformedEquation, ...]
    steps: CRTStep
    original_equations: tuple[ParsedCRTEquation, ...]


class ParseResult(typing.NamedTuple):
    valid: bool
    equations: tuple[ParsedCRTEquation, ...] = ()
    error: str | None = None


class VerificationRow(typing.NamedTuple):
    equation: ParsedCRTEquation
    result: int
    expected: int
    valid: bool


def _parse_row(eq: CRTEquation, row: int) -> ParsedCRTEquation | str:
    """Parses a single row, returning either the parsed equation or an error message."""
    b_raw = eq.b.strip()
    # Optional coefficient, defaults to 1 when left blank.
    b = 1 if b_raw == "" else parse_integer(b_raw)
    if b is None:
        return f"Row {row}: coefficient 'b' must be a valid integer"
    if b == 0:
        return f"Row {row}: coefficient 'b' cannot be zero"
    a = parse_integer(eq.a)
    if a is None:
        return f"Row {row}: remainder 'a' must be a valid integer"
    m = parse_integer(eq.m)
    if m is None:
        return f"Row {row}: modulus 'm' must be a valid integer"
    if m <= 1:
        return f"Row {row}: modulus 'm' must be greater than 1"
    g = gcd(b, m)
    if g != 1:
        return f"Row {row}: coefficient 'b' has no inverse mod {m}. gcd({b}, {m}) = {g} ≠ 1"
    return ParsedCRTEquation(b, a, m)


def parse_crt_equations(equations: Sequence[CRTEquation]) -> ParseResult:
    """Validates and parses raw congruence rows.

    Rows are numbered from 1 in error messages. Beyond per-row checks, every coefficient must be invertible modulo
    its own modulus and the moduli must be pairwise coprime. Only the first problem found is reported.

    Args:
        equations: The raw rows, at least two.

    Returns:
        A valid `ParseResult` holding the parsed equations, or an invalid one holding the error message.
    """
    if len(equations) < 2:
        return ParseResult(False, error="At least 2 equations are required for CRT")
    parsed: list[ParsedCRTEquation] = []
    for row, eq in enumerate(equations, start=1):
        res = _parse_row(eq, row)
        if isinstance(res, str):
            logger.info("crt_parse_rejected", row=row, reason=res)
            return ParseResult(False, error=res)
        parsed.append(res)

    for i, first in enumerate(parsed):
        for second in parsed[i + 1:]:
            g = gcd(first.m, second.m)
            if g != 1:
                error = f"Moduli must be pairwise coprime. gcd({first.m}, {second.m}) = {g} ≠ 1"
                logger.info("crt_parse_rejected", reason=error)
                return ParseResult(False, error=error)
    return ParseResult(True, equations=tuple(parsed))


def transform_equation(eq: ParsedCRTEquation) -> TransformedEquation:
    """Brings `b*x ≡ a (mod m)` into the form `x ≡ a * b^-1 (mod m)`.

    A coefficient of 1 skips the inversion arithmetic, but the trivial inverse is still recorded for display.

    Args:
        eq: The equation to transform.

    Returns:
        The transformed equation, along with the inversion trace of `b`.

    Raises:
        ArithmeticError: If `b` has no inverse modulo `m`.
    """
    b, a, m = eq
    if b == 1:
        return TransformedEquation(eq, extended_euclidean(1, m), SimpleCongruence(a % m, m))
    b_inverse = extended_euclidean(b, m)
    if not b_inverse.has_inverse:
        raise ArithmeticError(f"Cannot find inverse of {b} mod {m}: gcd = {b_inverse.gcd}")
    return TransformedEquation(eq, b_inverse, SimpleCongruence(a * b_inverse.normalized % m, m))


def solve_crt(equations: Sequence[ParsedCRTEquation]) -> CRTResult:
    """Solves a system of congruences via the Chinese Remainder Theorem.

    The equations must already have passed `parse_crt_equations()`, i.e. invertible coefficients and pairwise
    coprime moduli. Python integers are unbounded, so `M`, `Mi`, the terms and the solution never overflow.

    Args:
        equations: The parsed equations.

    Returns:
        The solution in [0, M) along with the full trace.

    Raises:
        ValueError: If `equations` is empty.
        ArithmeticError: If an inversion required by the construction does not exist, meaning the preconditions
            were violated.
    """
    if not equations:
        raise ValueError("At least one equation is required")
    transformed = tuple(transform_equation(eq) for eq in equations)
    simplified = tuple(te.transformed for te in transformed)

    big_m = math.prod(eq.m for eq in simplified)
    mi = tuple(big_m // eq.m for eq in simplified)

    inverse_calculations = []
    for factor, eq in zip(mi, simplified):
        calc = extended_euclidean(factor % eq.m, eq.m)
        if not calc.has_inverse:
            raise ArithmeticError(f"Moduli are not pairwise coprime: gcd({factor % eq.m}, {eq.m}) = {calc.gcd}")
        inverse_calculations.append(calc)
    mi_inverses = tuple(calc.normalized for calc in inverse_calculations)

    terms = tuple(eq.a * factor * inv for eq, factor, inv in zip(simplified, mi, mi_inverses))
    solution = sum(terms) % big_m
    logger.debug("crt_solved", equations=len(equations), modulus=big_m, solution=solution)

    steps = CRTStep(big_m, simplified, mi, mi_inverses, tuple(inverse_calculations), terms)
    return CRTResult(solution, big_m, transformed, steps, tuple(equations))


def verify_crt_solution(solution: int, equations: Sequence[ParsedCRTEquation]) -> tuple[VerificationRow, ...]:
    """Checks a solution against every original equation, `(b * solution) mod m == a mod m`."""
    rows = []
    for eq in equations:
        result = eq.b * solution % eq.m
        expected = eq.a % eq.m
        rows.append(VerificationRow(eq, result, expected, result == expected))
    return tuple(rows)
