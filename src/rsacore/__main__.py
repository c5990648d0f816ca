"""The Command Line Interface for rsacore, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that prompts for whatever the command
line left out, including the subcommand itself. All file and console I/O lives here; the library never does any.

Typical usage example:

    rsacore keygen --bits 1024 -p key.pub -P key
    rsacore encrypt -p key.pub --message "Hi there!"
    python -m rsacore
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import rsacore


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Callable = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in rsacore.",
            choices=["keygen", "encrypt", "decrypt", "export"],
        ),
    "keygen":
        HelpData("Key pair generation utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "export":
        HelpData("PKCS#1 public key export utility."),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
        ),
    "source":
        HelpData(
            description="Where the primes of the key pair come from.",
            choices=["random", "primes"],
            default="random",
        ),
    "random":
        HelpData("Generate random primes of the requested key size."),
    "primes":
        HelpData("Use two primes you provide."),
    "bits":
        HelpData(
            description="Key size (in bits).",
            choices=["512", "1024", "2048", "4096"],
            default="1024",
        ),
    "p":
        HelpData(
            description="The first prime.",
            format=rsacore.parse_int,
        ),
    "q":
        HelpData(
            description="The second prime, distinct from the first.",
            format=rsacore.parse_int,
        ),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "encoding":
        HelpData(description="Payload encoding.", choices=["utf-8", "utf-16", "ascii"], advanced=True, default="utf-8"),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("public_key", "private_key", "source"),
    "encrypt": ("public_key", "message", "encoding"),
    "decrypt": ("private_key", "message", "encoding"),
    "export": ("public_key",),
}

source_needs = {
    "random": ("bits",),
    "primes": ("p", "q"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
encp = argparse.ArgumentParser(add_help=False)
encp.add_argument("--encoding", "-e", choices=help_dict["encoding"].choices, help=help_dict["encoding"].description)
corep = argparse.ArgumentParser(prog="rsacore")
corep.add_argument("--version", action="version", version=f"%(prog)s {rsacore.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-v", action="count", default=0, help="Log progress (-v) or debug details (-vv)")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--source", choices=help_dict["source"].choices, help=help_dict["source"].description)
keygen.add_argument("--bits", choices=help_dict["bits"].choices, help=help_dict["bits"].description)
keygen.add_argument("--p", type=help_dict["p"].format, help=help_dict["p"].description)
keygen.add_argument("--q", type=help_dict["q"].format, help=help_dict["q"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey, payloads, encp], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey, payloads, encp], help=help_dict["decrypt"].description)
export = commands.add_parser("export", parents=[pubkey], help=help_dict["export"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default:
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
        except ValueError as exc:
            prntr(f"We could not convert your value: {exc}")


def fill_args(args: argparse.Namespace, reqs: tuple[str, ...], mode: tuple[bool, bool], pspr: typing.Callable):
    """Prompt for every argument in `reqs` the command line did not provide."""
    for req in reqs:
        if getattr(args, req, None) is None:
            if help_dict[req].choices is not None:
                res = choice_handler(req, mode)
            else:
                res = input_handler(req, mode)
            setattr(args, req, res)
        else:
            pspr(f"{req}: {getattr(args, req)}")


def check_message(mess: str, enc) -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        mess = mess[2:]
        with open(mess, "r", encoding=enc) as f:
            mess = f.read()
    return mess


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def run(args: argparse.Namespace, pspr: typing.Callable) -> None:
    """Executes the fully specified subcommand."""
    match args.subcommand:
        case "keygen":
            if args.private_key.exists() or args.public_key.exists():
                rs = getattr(args, "overwrite", None)
                if rs is None:
                    rs = choice_handler("overwrite", (args.non_interactive, args.advanced), pspr)
                if rs == "N":
                    print("Destination private or public key already exists!")
                    return
            if args.source == "primes":
                pair = rsacore.generate_from_primes(args.p, args.q)
            else:
                pspr(f"Generating a {args.bits}-bit key pair, this may take a moment...")
                pair = rsacore.generate_from_bits(int(args.bits))
            args.private_key.write_text(rsacore.format_private_key(pair.private_key) + "\n", encoding="ascii")
            args.public_key.write_text(rsacore.format_public_key(pair.public_key) + "\n", encoding="ascii")
            pspr("\nKey pair generated!")
        case "encrypt":
            args.message = check_message(args.message, args.encoding)
            rpu = rsacore.parse_public_key(args.public_key.read_text(encoding="ascii"))
            ciph = rsacore.encrypt(args.message, rpu, args.encoding)
            pspr("Ciphertext:")
            print(ciph)
        case "decrypt":
            args.message = check_message(args.message, "ascii")
            rpk = rsacore.parse_private_key(args.private_key.read_text(encoding="ascii"))
            clear = rsacore.decrypt(args.message, rpk, args.encoding)
            pspr("Cleartext:")
            print(clear)
        case "export":
            rpu = rsacore.parse_public_key(args.public_key.read_text(encoding="ascii"))
            print(rsacore.to_pkcs1_pem(rpu), end="")


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    setup_logging(args.verbose)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to rsacore!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    if getattr(args, "p", None) is not None or getattr(args, "q", None) is not None:
        args.source = "primes"
    fill_args(args, needs[args.subcommand], pstatus, pspr)
    if args.subcommand == "keygen":
        fill_args(args, source_needs[args.source], pstatus, pspr)
    pspr("\nInput Complete! Executing...")
    try:
        run(args, pspr)
    except rsacore.RSACoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using rsacore!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
