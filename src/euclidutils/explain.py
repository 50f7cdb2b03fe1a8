"""Plain-text renderings of the derivations, for terminals and other text-only front ends.

Every function here is a pure formatter: it reads a result produced by the engines and returns lines of text,
one list entry per displayed line.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Sequence

from euclidutils.crt import CRTResult
from euclidutils.crt import VerificationRow
from euclidutils.euclid import CalculationResult
from euclidutils.folding import FoldSequence

TOO_MANY_STEPS_MESSAGE = "Too many steps — enable Modulo toggle or choose smaller numbers"
_TABLE_HEADERS = ("step", "a", "b", "q", "r", "s", "t")


def format_steps_table(result: CalculationResult) -> list[str]:
    """Formats the Extended Euclidean Algorithm trace as a right-aligned table.

    Row 0 has no quotient, so its `q` cell is shown as a dash.
    """
    rows = [_TABLE_HEADERS]
    for step in result.steps:
        cells = [str(v) for v in step]
        if step.step == 0:
            cells[3] = "-"
        rows.append(tuple(cells))
    widths = [max(len(row[i]) for row in rows) for i in range(len(_TABLE_HEADERS))]
    lines = [" | ".join(cell.rjust(w) for cell, w in zip(row, widths)) for row in rows]
    lines.insert(1, "-+-".join("-" * w for w in widths))
    return lines


def no_inverse_message(result: CalculationResult) -> str:
    return (f"No modular inverse exists because gcd({result.original_a}, {result.original_m}) = {result.gcd} ≠ 1. "
            "The modular inverse only exists when gcd(a, m) = 1.")


def explain_inverse(result: CalculationResult) -> list[str]:
    """Worded step-by-step explanation of a modular inverse calculation.

    Args:
        result: The result of `extended_euclidean()`.

    Returns:
        The explanation lines. Empty if the trace holds only the initialization row.
    """
    if len(result.steps) <= 1:
        return []
    a, m, (s, t) = result.original_a, result.original_m, result.bezout_identity
    lines = [f"Goal: find x such that {a}x ≡ 1 (mod {m})", "", "Extended Euclidean Algorithm:"]
    for step in result.steps[1:]:
        line = f"  Step {step.step}: {step.a} = {step.q} × {step.b} + {step.r}"
        if step.r == 0:
            line += "  (remainder is 0, algorithm terminates)"
        lines.append(line)
    verdict = "inverse exists" if result.has_inverse else "inverse does not exist"
    lines += ["", f"GCD: gcd({a}, {m}) = {result.gcd} ({verdict})"]
    lines.append(f"Bézout identity: {a} × ({s}) + {m} × ({t}) = {result.gcd}")
    if result.normalized is not None:
        lines.append(f"The coefficient s = {s} gives {a} × {s} ≡ 1 (mod {m})")
        if s != result.normalized:
            lines.append(f"Normalizing to [0, {m - 1}]: {s} mod {m} = {result.normalized}")
        lines.append(f"x = {result.normalized}")
    return lines


def explain_crt(result: CRTResult, verification: Sequence[VerificationRow] = ()) -> list[str]:
    """Worded walkthrough of a Chinese Remainder Theorem solution.

    The transformation section only appears if at least one equation carries a coefficient other than 1, the
    remaining sections are numbered accordingly.

    Args:
        result: The result of `solve_crt()`.
        verification: Optional rows from `verify_crt_solution()`, appended as a final check section.

    Returns:
        The explanation lines.
    """
    steps = result.steps
    lines: list[str] = []
    numbered = 0

    def section(title: str) -> None:
        nonlocal numbered
        numbered += 1
        if lines:
            lines.append("")
        lines.append(f"Step {numbered}: {title}")

    with_coefficients = [te for te in result.transformed_equations if te.original.b != 1]
    if with_coefficients:
        section("Transform equations to x ≡ a (mod m) form")
        for te in with_coefficients:
            b, a, m = te.original
            lines.append(f"  {b}x ≡ {a} (mod {m})  →  x ≡ {a} × {b}⁻¹ (mod {m})  →  x ≡ {te.transformed.a} (mod {m})"
                         f"  [{b}⁻¹ (mod {m}) = {te.b_inverse.normalized}]")

    section("Calculate common modulus M")
    lines.append(f"  M = {' × '.join(str(eq.m) for eq in steps.equations)} = {steps.M}")

    section("Calculate Mᵢ = M / mᵢ")
    for i, (eq, factor) in enumerate(zip(steps.equations, steps.Mi), start=1):
        lines.append(f"  M{i} = {steps.M} / {eq.m} = {factor}")

    section("Calculate Mᵢ⁻¹ (mod mᵢ)")
    for i, (eq, factor, inv) in enumerate(zip(steps.equations, steps.Mi, steps.Mi_inverses), start=1):
        lines.append(f"  M{i}⁻¹ = {factor % eq.m}⁻¹ (mod {eq.m}) = {inv}")

    section("Calculate the solution")
    for i, (eq, factor, inv, term) in enumerate(zip(steps.equations, steps.Mi, steps.Mi_inverses, steps.terms),
                                                start=1):
        lines.append(f"  a{i} × M{i} × M{i}⁻¹ = {eq.a} × {factor} × {inv} = {term}")
    total = sum(steps.terms)
    lines.append(f"  Sum = {' + '.join(str(term) for term in steps.terms)} = {total}")
    lines.append(f"  x = {total} mod {result.modulus} = {result.solution}")
    lines.append(f"  x ≡ {result.solution} (mod {result.modulus})")

    if verification:
        lines += ["", f"Verification of x = {result.solution}:"]
        for row in verification:
            prefix = f"{row.equation.b} × " if row.equation.b != 1 else ""
            mark = "ok" if row.valid else "FAILED"
            lines.append(f"  {prefix}{result.solution} mod {row.equation.m} = {row.result} ≡ {row.expected} "
                         f"(mod {row.equation.m})  {mark}")
    return lines


def explain_folds(sequence: FoldSequence) -> list[str]:
    """One line per fold state, noting quick folds where some were collapsed."""
    if sequence.too_many:
        return [TOO_MANY_STEPS_MESSAGE]
    lines = []
    for i, step in enumerate(sequence.steps):
        line = f"  {i:>3}: left = {step.left}, right = {step.right}"
        if step.quick_folds:
            line += f"  (+{step.quick_folds} quick folds)"
        lines.append(line)
    if sequence.steps:
        lines.append(f"Both arms equal {sequence.gcd}, so gcd = {sequence.gcd}")
    return lines
