"""Euclidean Algorithm Utilities in an Academic Sense.

Provides the Extended Euclidean Algorithm with a full derivation trace and normalized modular inverse, a Chinese
Remainder Theorem solver built on top of it and the "folding segments" model of the Euclidean algorithm. Every
result keeps the intermediate values so that it can be displayed step-by-step.

Typical usage example:

    res = extended_euclidean(7, 26)
    parsed = parse_crt_equations([CRTEquation("", "2", "3"), CRTEquation("", "3", "5")])
    sol = solve_crt(parsed.equations)
    seq = generate_steps(48, 18, use_modulo=True)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from euclidutils.crt import CRTEquation
from euclidutils.crt import CRTResult
from euclidutils.crt import parse_crt_equations
from euclidutils.crt import ParsedCRTEquation
from euclidutils.crt import solve_crt
from euclidutils.crt import verify_crt_solution
from euclidutils.euclid import CalculationResult
from euclidutils.euclid import extended_euclidean
from euclidutils.euclid import gcd
from euclidutils.euclid import Step
from euclidutils.folding import FoldSequence
from euclidutils.folding import FoldStep
from euclidutils.folding import generate_steps
from euclidutils.folding import MAX_FOLD_STEPS
from euclidutils.validators import MAX_SAFE_INTEGER
from euclidutils.validators import validate_inputs
from euclidutils.validators import validate_positive_integer

__version__ = "0.0.1"
__all__ = [
    "CRTEquation",
    "CRTResult",
    "ParsedCRTEquation",
    "parse_crt_equations",
    "solve_crt",
    "verify_crt_solution",
    "CalculationResult",
    "Step",
    "extended_euclidean",
    "gcd",
    "FoldSequence",
    "FoldStep",
    "generate_steps",
    "MAX_FOLD_STEPS",
    "MAX_SAFE_INTEGER",
    "validate_inputs",
    "validate_positive_integer",
]
