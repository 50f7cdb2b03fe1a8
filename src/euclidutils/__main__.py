"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the components missing from the command line, including the option that none are given.

Typical usage example:

    euclidutils inverse --a 7 --m 26
    euclidutils crt -E ,2,3 -E ,3,5 -E ,2,7
    euclidutils fold --a 48 --b 18 --modulo
    OR
    python -m euclidutils
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import sys
import typing

import structlog

import euclidutils
from euclidutils import explain


def parse_equation_arg(text: str) -> list[euclidutils.CRTEquation]:
    """Splits `B,A,M` triples separated by `;` into raw equation rows. `A,M` pairs leave the coefficient blank.

    Raises:
        ValueError: If a triple does not have two or three fields.
    """
    rows = []
    for chunk in text.split(";"):
        if not chunk.strip():
            continue
        fields = chunk.split(",")
        if len(fields) == 2:
            fields.insert(0, "")
        if len(fields) != 3:
            raise ValueError(f"Expected B,A,M but got {chunk.strip()!r}")
        rows.append(euclidutils.CRTEquation(*fields))
    return rows


def yes_no(text: str) -> bool:
    """Converts a Y/N answer to a boolean.

    Raises:
        ValueError: If the answer is neither yes nor no.
    """
    answer = text.strip().lower()
    if answer in ("y", "yes"):
        return True
    if answer in ("n", "no"):
        return False
    raise ValueError(f"Expected Y or N but got {text!r}")


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Callable = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in Euclid Utils.",
            choices=["inverse", "crt", "fold"],
        ),
    "inverse":
        HelpData("Modular inverse via the Extended Euclidean Algorithm."),
    "crt":
        HelpData("Chinese Remainder Theorem solver."),
    "fold":
        HelpData("Euclidean folding step sequence."),
    "a":
        HelpData(description="The number to invert, or the left segment length when folding."),
    "m":
        HelpData(description="The modulus, greater than 1."),
    "b":
        HelpData(description="The right segment length."),
    "equations":
        HelpData(
            description="Congruences b*x ≡ a (mod m) as B,A,M triples separated by ';'. B may be left blank.",
            format=parse_equation_arg,
        ),
    "modulo":
        HelpData(
            description="Collapse repeated same-direction folds into a single division step.",
            format=yes_no,
            advanced=True,
            default=False,
        ),
    "table":
        HelpData(
            description="Print the raw step table along with the explanation.",
            format=yes_no,
            advanced=True,
            default=False,
        ),
}

needs = {
    "inverse": ("a", "m", "table"),
    "crt": ("equations", "table"),
    "fold": ("a", "b", "modulo"),
}

table = argparse.ArgumentParser(add_help=False)
table.add_argument("--table", "-t", action="store_true", default=None, help=help_dict["table"].description)
corep = argparse.ArgumentParser(prog="euclidutils")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {euclidutils.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Enable debug logging")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

inverse = commands.add_parser("inverse", parents=[table], help=help_dict["inverse"].description)
inverse.add_argument("--a", help=help_dict["a"].description)
inverse.add_argument("--m", help=help_dict["m"].description)

crt = commands.add_parser("crt", parents=[table], help=help_dict["crt"].description)
crt.add_argument("--equation",
                 "-E",
                 dest="equations",
                 action="extend",
                 type=help_dict["equations"].format,
                 help=help_dict["equations"].description)

fold = commands.add_parser("fold", help=help_dict["fold"].description)
fold.add_argument("--a", help=help_dict["a"].description)
fold.add_argument("--b", help=help_dict["b"].description)
fold.add_argument("--modulo", "-M", action="store_true", default=None, help=help_dict["modulo"].description)


def configure_logging(verbose: bool) -> None:
    """Routes the package's structlog events through the standard library to stderr.

    Debug events are only shown in verbose mode, otherwise warnings and above. Stdout stays reserved for results.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    formatter = structlog.stdlib.ProcessorFormatter(processors=[
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        structlog.dev.ConsoleRenderer(colors=False),
    ])
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    package_logger = logging.getLogger("euclidutils")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def run_inverse(a: str, m: str, show_table: bool) -> int:
    validation = euclidutils.validate_inputs(a, m)
    if not validation.valid:
        print(validation.error)
        return 1
    result = euclidutils.extended_euclidean(validation.a, validation.m)
    if show_table:
        print("\n".join(explain.format_steps_table(result)) + "\n")
    print("\n".join(explain.explain_inverse(result)))
    if not result.has_inverse:
        print(explain.no_inverse_message(result))
        return 1
    return 0


def run_crt(equations: list[euclidutils.CRTEquation], show_table: bool) -> int:
    parsed = euclidutils.parse_crt_equations(equations)
    if not parsed.valid:
        print(parsed.error)
        return 1
    result = euclidutils.solve_crt(parsed.equations)
    verification = euclidutils.verify_crt_solution(result.solution, parsed.equations)
    print("\n".join(explain.explain_crt(result, verification)))
    if show_table:
        for i, calc in enumerate(result.steps.inverse_calculations, start=1):
            print(f"\nM{i}⁻¹ table:")
            print("\n".join(explain.format_steps_table(calc)))
    return 0 if all(row.valid for row in verification) else 1


def run_fold(a: str, b: str, use_modulo: bool) -> int:
    values = []
    for raw, field in ((a, "Left segment (a)"), (b, "Right segment (b)")):
        validation = euclidutils.validate_positive_integer(raw, field)
        if not validation.valid:
            print(validation.error)
            return 1
        values.append(validation.value)
    sequence = euclidutils.generate_steps(*values, use_modulo)
    print("\n".join(explain.explain_folds(sequence)))
    return 1 if sequence.too_many else 0


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)
    configure_logging(args.verbose)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to Euclid Utils!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...\n")
    match args.subcommand:
        case "inverse":
            status = run_inverse(args.a, args.m, args.table)
        case "crt":
            status = run_crt(args.equations, args.table)
        case "fold":
            status = run_fold(args.a, args.b, args.modulo)
    if status:
        sys.exit(status)
    pspr("\nThank you for using Euclid Utils!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
