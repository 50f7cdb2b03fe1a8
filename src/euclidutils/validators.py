"""Input validation for raw numeric strings, before they reach the arithmetic engines.

Validation never raises, every outcome is returned as a structured result carrying either the parsed value or a
message fit to show the user as-is.

Typical usage example:

    res = validate_inputs("7", "26")
    if res.valid:
        extended_euclidean(res.a, res.m)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import re
import typing

MAX_SAFE_INTEGER: int = 2**53 - 1
_INTEGER_PATTERN = re.compile(r"-?[0-9]+")


class ValidationResult(typing.NamedTuple):
    valid: bool
    value: int | None = None
    error: str | None = None


class InputsValidation(typing.NamedTuple):
    valid: bool
    a: int | None = None
    m: int | None = None
    error: str | None = None


def parse_integer(raw: str) -> int | None:
    """Strictly parses a decimal integer, an optional leading minus and digits only.

    Surrounding whitespace is ignored. Signs other than `-`, decimals and exponents are all rejected.

    Args:
        raw: The string to parse.

    Returns:
        The integer, or None if `raw` is not a plain integer.
    """
    trimmed = raw.strip()
    if not _INTEGER_PATTERN.fullmatch(trimmed):
        return None
    return int(trimmed)


def validate_positive_integer(raw: str, field: str) -> ValidationResult:
    """Validates that a string holds a positive integer within the safe range.

    Rules are checked in order and the first violation is reported.

    Args:
        raw: The raw user input.
        field: Human-readable field label, used as the subject of error messages.

    Returns:
        A valid result with the parsed value, or an invalid one with the error message.
    """
    if not raw.strip():
        return ValidationResult(False, error=f"{field} is required")
    num = parse_integer(raw)
    if num is None:
        return ValidationResult(False, error=f"{field} must be a valid integer")
    if num <= 0:
        return ValidationResult(False, error=f"{field} must be a positive integer")
    if num > MAX_SAFE_INTEGER:
        return ValidationResult(False, error=f"{field} is too large")
    return ValidationResult(True, value=num)


def validate_inputs(a: str, m: str) -> InputsValidation:
    """Validates the number and modulus for a modular inverse calculation."""
    a_res = validate_positive_integer(a, "Number (a)")
    if not a_res.valid:
        return InputsValidation(False, error=a_res.error)
    m_res = validate_positive_integer(m, "Modulus (m)")
    if not m_res.valid:
        return InputsValidation(False, error=m_res.error)
    if m_res.value <= 1:
        return InputsValidation(False, error="Modulus (m) must be greater than 1")
    return InputsValidation(True, a=a_res.value, m=m_res.value)
