# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import sys

import pytest
import structlog

from euclidutils import __main__ as cli
from euclidutils.crt import CRTEquation


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    package_logger = logging.getLogger("euclidutils")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def run(monkeypatch, capsys, mocker):

    def runner(*argv, answers=()):
        monkeypatch.setattr(sys, "argv", ["euclidutils", *argv])
        mocker.patch("builtins.input", side_effect=list(answers))
        code = 0
        try:
            cli.main()
        except SystemExit as exc:
            code = exc.code
        return code, capsys.readouterr().out

    return runner


def test_parse_equation_arg():
    assert cli.parse_equation_arg(",2,3") == [CRTEquation("", "2", "3")]
    assert cli.parse_equation_arg("2,3") == [CRTEquation("", "2", "3")]
    assert cli.parse_equation_arg("3,2,5; ,1,4;") == [CRTEquation("3", "2", "5"), CRTEquation(" ", "1", "4")]
    with pytest.raises(ValueError):
        cli.parse_equation_arg("1,2,3,4")
    with pytest.raises(ValueError):
        cli.parse_equation_arg("7")


@pytest.mark.parametrize("text,expected", [("y", True), ("YES", True), (" n ", False), ("no", False)])
def test_yes_no(text, expected):
    assert cli.yes_no(text) is expected


def test_yes_no_rejects():
    with pytest.raises(ValueError):
        cli.yes_no("maybe")


def test_inverse(run):
    code, out = run("-n", "inverse", "--a", "7", "--m", "26")
    assert code == 0
    assert out.splitlines()[-1] == "x = 15"


def test_inverse_with_table(run):
    code, out = run("-n", "inverse", "--a", "7", "--m", "26", "--table")
    assert code == 0
    assert out.splitlines()[0].startswith("step |")


def test_inverse_missing(run):
    code, out = run("-n", "inverse", "--a", "4", "--m", "8")
    assert code == 1
    assert "No modular inverse exists because gcd(4, 8) = 4 ≠ 1." in out


def test_inverse_invalid(run):
    code, out = run("-n", "inverse", "--a", "abc", "--m", "8")
    assert code == 1
    assert out.strip() == "Number (a) must be a valid integer"


def test_crt(run):
    code, out = run("-n", "crt", "-E", ",2,3", "-E", ",3,5", "-E", ",2,7")
    assert code == 0
    assert "  x ≡ 23 (mod 105)" in out.splitlines()


def test_crt_coefficients(run):
    code, out = run("-n", "crt", "-E", "3,2,5;,1,4", "--table")
    assert code == 0
    assert "  x ≡ 9 (mod 20)" in out.splitlines()
    assert "M2⁻¹ table:" in out


def test_crt_rejected(run):
    code, out = run("-n", "crt", "-E", ",1,4", "-E", ",1,6")
    assert code == 1
    assert out.strip() == "Moduli must be pairwise coprime. gcd(4, 6) = 2 ≠ 1"


@pytest.mark.parametrize("modulo", [[], ["--modulo"]])
def test_fold(run, modulo):
    code, out = run("-n", "fold", "--a", "48", "--b", "18", *modulo)
    assert code == 0
    assert out.splitlines()[-1] == "Both arms equal 6, so gcd = 6"


def test_fold_too_many(run):
    code, out = run("-n", "fold", "--a", "1", "--b", "500")
    assert code == 1
    assert "Too many steps" in out


def test_logs_go_to_stderr(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["euclidutils", "-n", "fold", "--a", "1", "--b", "500"])
    with pytest.raises(SystemExit):
        cli.main()
    captured = capsys.readouterr()
    assert "fold_step_cap_exceeded" not in captured.out
    assert "fold_step_cap_exceeded" in captured.err


def test_verbose_logs_debug_to_stderr(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["euclidutils", "-n", "-V", "inverse", "--a", "7", "--m", "26"])
    cli.main()
    captured = capsys.readouterr()
    assert captured.out.splitlines()[-1] == "x = 15"
    assert "eea_complete" not in captured.out
    assert "eea_complete" in captured.err


def test_fold_invalid(run):
    code, out = run("-n", "fold", "--a", "48", "--b", "0")
    assert code == 1
    assert out.strip() == "Right segment (b) must be a positive integer"


def test_non_interactive_missing_argument(run):
    with pytest.raises(OSError):
        run("-n", "inverse", "--a", "7")


def test_interactive(run):
    code, out = run(answers=["inverse", "7", "26"])
    assert code == 0
    assert "Welcome to Euclid Utils!" in out
    assert "x = 15" in out.splitlines()
    assert out.splitlines()[-1] == "Goodbye!"


def test_interactive_retries(run):
    code, out = run("crt", answers=["", "1,2,3,4", ",2,3;,3,5"])
    assert code == 0
    assert "Please provide a value." in out
    assert "We could not convert your value to parse_equation_arg." in out
    assert "  x ≡ 8 (mod 15)" in out.splitlines()


def test_interactive_advanced(run):
    code, out = run("-a", "fold", "--a", "48", "--b", "18", answers=[""])
    assert code == 0
    assert "(+1 quick folds)" not in out
    code, out = run("-a", "fold", "--a", "48", "--b", "18", answers=["y"])
    assert code == 0
    assert "(+1 quick folds)" in out
    code, out = run("-a", "inverse", answers=["7", "26", "y"])
    assert code == 0
    assert "step |" in out


def test_verbose_logging(run, mocker):
    configure = mocker.spy(cli, "configure_logging")
    run("-n", "-V", "fold", "--a", "4", "--b", "6")
    configure.assert_called_once_with(True)
