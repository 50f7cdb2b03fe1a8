# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from euclidutils import crt
from euclidutils import explain
from euclidutils import folding
from euclidutils.crt import ParsedCRTEquation
from euclidutils.euclid import Bezout
from euclidutils.euclid import CalculationResult
from euclidutils.euclid import extended_euclidean
from euclidutils.euclid import Step


def test_format_steps_table():
    lines = explain.format_steps_table(extended_euclidean(7, 26))
    assert len(lines) == 2 + 6
    assert lines[0].split(" | ") == ["step", " a", " b", "q", "r", "  s", " t"]
    assert set(lines[1]) == {"-", "+"}
    assert [cell.strip() for cell in lines[2].split("|")] == ["0", "7", "26", "-", "7", "1", "0"]
    assert [cell.strip() for cell in lines[-1].split("|")] == ["5", "2", "1", "2", "0", "26", "-7"]
    assert len({len(line) for line in lines}) == 1


def test_explain_inverse():
    lines = explain.explain_inverse(extended_euclidean(7, 26))
    assert lines[0] == "Goal: find x such that 7x ≡ 1 (mod 26)"
    assert "  Step 2: 26 = 3 × 7 + 5" in lines
    assert "  Step 5: 2 = 2 × 1 + 0  (remainder is 0, algorithm terminates)" in lines
    assert "GCD: gcd(7, 26) = 1 (inverse exists)" in lines
    assert "Bézout identity: 7 × (-11) + 26 × (3) = 1" in lines
    assert "Normalizing to [0, 25]: -11 mod 26 = 15" in lines
    assert lines[-1] == "x = 15"


def test_explain_inverse_positive_coefficient():
    lines = explain.explain_inverse(extended_euclidean(3, 5))
    assert lines[-1] == "x = 2"
    assert not any(line.startswith("Normalizing") for line in lines)


def test_explain_inverse_missing():
    res = extended_euclidean(4, 8)
    lines = explain.explain_inverse(res)
    assert "GCD: gcd(4, 8) = 4 (inverse does not exist)" in lines
    assert not any(line.startswith("x =") for line in lines)
    assert explain.no_inverse_message(res) == ("No modular inverse exists because gcd(4, 8) = 4 ≠ 1. "
                                               "The modular inverse only exists when gcd(a, m) = 1.")


def test_explain_inverse_trivial():
    res = CalculationResult(None, 0, (Step(0, 0, 0, 0, 0, 1, 0),), Bezout(1, 0), None, 0, 0)
    assert explain.explain_inverse(res) == []


def test_explain_crt_plain():
    equations = (ParsedCRTEquation(1, 2, 3), ParsedCRTEquation(1, 3, 5), ParsedCRTEquation(1, 2, 7))
    res = crt.solve_crt(equations)
    lines = explain.explain_crt(res)
    assert lines[0] == "Step 1: Calculate common modulus M"
    assert "  M = 3 × 5 × 7 = 105" in lines
    assert "  M1 = 105 / 3 = 35" in lines
    assert "  M1⁻¹ = 2⁻¹ (mod 3) = 2" in lines
    assert "  a1 × M1 × M1⁻¹ = 2 × 35 × 2 = 140" in lines
    assert "  Sum = 140 + 63 + 30 = 233" in lines
    assert "  x = 233 mod 105 = 23" in lines
    assert lines[-1] == "  x ≡ 23 (mod 105)"


def test_explain_crt_with_coefficients_and_verification():
    equations = (ParsedCRTEquation(3, 2, 5), ParsedCRTEquation(1, 1, 4))
    res = crt.solve_crt(equations)
    verification = crt.verify_crt_solution(res.solution, equations)
    lines = explain.explain_crt(res, verification)
    assert lines[0] == "Step 1: Transform equations to x ≡ a (mod m) form"
    assert lines[1].startswith("  3x ≡ 2 (mod 5)  →  x ≡ 2 × 3⁻¹ (mod 5)  →  x ≡ 4 (mod 5)")
    assert lines[1].endswith("[3⁻¹ (mod 5) = 2]")
    assert "Step 2: Calculate common modulus M" in lines
    assert "Step 5: Calculate the solution" in lines
    assert "Verification of x = 9:" in lines
    assert "  3 × 9 mod 5 = 2 ≡ 2 (mod 5)  ok" in lines
    assert lines[-1] == "  9 mod 4 = 1 ≡ 1 (mod 4)  ok"


def test_explain_crt_marks_failed_verification():
    equations = (ParsedCRTEquation(1, 2, 3), ParsedCRTEquation(1, 3, 5))
    res = crt.solve_crt(equations)
    lines = explain.explain_crt(res, crt.verify_crt_solution(res.solution + 1, equations))
    assert lines[-1].endswith("FAILED")


def test_explain_folds():
    lines = explain.explain_folds(folding.generate_steps(48, 18, True))
    assert lines[0] == "    0: left = 48, right = 18"
    assert lines[1] == "    1: left = 12, right = 18  (+1 quick folds)"
    assert lines[-1] == "Both arms equal 6, so gcd = 6"


def test_explain_folds_edge():
    assert explain.explain_folds(folding.generate_steps(1, 500, False)) == [explain.TOO_MANY_STEPS_MESSAGE]
    assert explain.explain_folds(folding.generate_steps(0, 5, False)) == []
