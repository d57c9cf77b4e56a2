"""The Command Line Interface for the simulator, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface): whatever the command line leaves
out is asked for interactively, unless `--non-interactive` is given, in which case defaults are used where they
exist and anything else is an error. The `demo` subcommand replays the reference run on the toy primes 61 and 53.

Typical usage example:

    rsasim keygen --p 61 --q 53
    rsasim -n encrypt -m 3233 -e 17 --message RUST
    python -m rsasim demo
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import pathlib
import sys
import typing

import rsasim

DEMO_PRIMES = (61, 53)
DEMO_MESSAGE = "RUST"


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in the RSA simulator.",
            choices=["keygen", "encrypt", "decrypt", "demo"],
        ),
    "keygen":
        HelpData("Key derivation from two primes."),
    "encrypt":
        HelpData("Text encryption with a public key."),
    "decrypt":
        HelpData("Text decryption with a private key."),
    "demo":
        HelpData("Reference run on toy primes."),
    "p":
        HelpData(description="First prime.", format=int),
    "q":
        HelpData(description="Second prime.", format=int),
    "modulus":
        HelpData(description="Modulus n of the key.", format=int),
    "pub_exponent":
        HelpData(
            description="Public exponent e.",
            format=int,
            advanced=True,
            default=rsasim.DEFAULT_PUBLIC_EXPONENT,
        ),
    "priv_exponent":
        HelpData(description="Private exponent d.", format=int),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "codec":
        HelpData(
            description="Blocking scheme. `byte` is one block per byte. Warning! Unsecure.",
            choices=["octet", "byte"],
            advanced=True,
            default="octet",
        ),
    "encoding":
        HelpData(description="Payload encoding. The byte codec rejects utf-16, it needs a one-byte placeholder.",
                 choices=["utf-8", "utf-16", "ascii", "latin-1"],
                 advanced=True,
                 default="utf-8"),
}

needs = {
    "keygen": ("p", "q", "pub_exponent"),
    "encrypt": ("modulus", "pub_exponent", "message", "codec", "encoding"),
    "decrypt": ("modulus", "priv_exponent", "message", "encoding"),
    "demo": (),
}

modulus = argparse.ArgumentParser(add_help=False)
modulus.add_argument("--modulus", "-m", type=help_dict["modulus"].format, help=help_dict["modulus"].description)
pubexp = argparse.ArgumentParser(add_help=False)
pubexp.add_argument("--pub-exponent",
                    "-e",
                    type=help_dict["pub_exponent"].format,
                    help=help_dict["pub_exponent"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
encp = argparse.ArgumentParser(add_help=False)
encp.add_argument("--encoding", "-E", choices=help_dict["encoding"].choices, help=help_dict["encoding"].description)
corep = argparse.ArgumentParser(prog="rsasim")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsasim.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[pubexp], help=help_dict["keygen"].description)
keygen.add_argument("--p", type=help_dict["p"].format, help=help_dict["p"].description)
keygen.add_argument("--q", type=help_dict["q"].format, help=help_dict["q"].description)

encrypt = commands.add_parser("encrypt",
                              parents=[modulus, pubexp, payloads, encp],
                              help=help_dict["encrypt"].description)
encrypt.add_argument("--codec", "-c", choices=help_dict["codec"].choices, help=help_dict["codec"].description)

decrypt = commands.add_parser("decrypt", parents=[modulus, payloads, encp], help=help_dict["decrypt"].description)
decrypt.add_argument("--priv-exponent",
                     "-d",
                     type=help_dict["priv_exponent"].format,
                     help=help_dict["priv_exponent"].description)

demo = commands.add_parser("demo", help=help_dict["demo"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]) -> typing.Any:
    """Resolves an argument without prompting, or returns its HelpData when the user has to be asked."""
    helper_data = help_dict[arg]
    non_interactive, advanced = mode
    skip_prompt = non_interactive or (helper_data.advanced and not advanced)
    if skip_prompt and helper_data.default is not None:
        return helper_data.default
    if non_interactive:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def ask(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print) -> typing.Any:
    """Prompts for a missing argument until a valid value is given.

    Arguments with choices only accept one of them, the others are converted with their `format`. An empty answer
    takes the default where one exists.
    """
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    for choice in helper_data.choices or ():
        blurb = f"{choice} - {help_dict[choice].description}" if choice in help_dict else choice
        prntr(blurb + (" (Default)" if choice == helper_data.default else ""))
    if helper_data.default is not None:
        if not helper_data.choices:
            prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        answer = input(f"{arg}: ")
        if not answer:
            if helper_data.default is not None:
                return helper_data.default
            prntr("Please provide a value.")
        elif helper_data.choices:
            if answer in helper_data.choices:
                return answer
            prntr("Please select an option from the list.")
        else:
            try:
                return helper_data.format(answer)
            except ValueError:
                prntr(f"We could not convert your value to {helper_data.format.__name__}.")


def check_message(mess: str, enc: str) -> str:
    """Reads the payload from a file when it is given as `P:<path>`, otherwise returns it unchanged."""
    if not mess.startswith("P:"):
        return mess
    return pathlib.Path(mess.removeprefix("P:")).read_text(encoding=enc)


def run_demo(prntr: typing.Callable = print) -> bool:
    """Reference run: derives keys from the toy primes, then encrypts and decrypts the sample message byte by byte.

    Returns:
        Whether the recovered message matches the original.
    """
    p, q = DEMO_PRIMES
    pub, priv = rsasim.derive_from_source(rsasim.StaticPrimeSource(p, q))
    prntr("Key derivation:")
    prntr(f"  Prime p: {p}")
    prntr(f"  Prime q: {q}")
    prntr(f"  Modulus n (public): {pub.n}")
    prntr(f"  Totient phi(n) (secret): {(p - 1) * (q - 1)}")
    prntr(f"  Public exponent e: {pub.e}")
    prntr(f"  Private exponent d (secret): {priv.d}")
    blocks = rsasim.encode_text(DEMO_MESSAGE)
    ciphertext = rsasim.encrypt_blocks(blocks, pub)
    prntr("Encryption:")
    prntr(f"  Original message: {DEMO_MESSAGE!r}")
    prntr(f"  Ciphertext blocks: {ciphertext}")
    plain = rsasim.decrypt_blocks(ciphertext, priv)
    recovered = rsasim.decode_text(plain)
    prntr("Decryption:")
    prntr(f"  Plaintext blocks: {plain}")
    prntr(f"  Recovered message: {recovered!r}")
    return recovered == DEMO_MESSAGE


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to the RSA simulator!\n")
    if not args.subcommand:
        args.subcommand = ask("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            setattr(args, reqs, ask(reqs, pstatus))
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    try:
        match args.subcommand:
            case "keygen":
                pub, priv = rsasim.derive_keys(args.p, args.q, args.pub_exponent)
                pspr("Key pair derived!")
                print(f"n: {pub.n}")
                print(f"e: {pub.e}")
                print(f"d: {priv.d}")
            case "encrypt":
                message = check_message(args.message, args.encoding)
                pub = rsasim.RSAPubKey(args.modulus, args.pub_exponent)
                if args.codec == "byte":
                    codec = rsasim.ByteCodec(args.encoding)
                else:
                    codec = rsasim.OctetCodec(args.modulus, args.encoding)
                ciph = rsasim.encrypt_text(message, pub, codec)
                pspr("Ciphertext:")
                print(ciph.decode("ascii"))
            case "decrypt":
                message = check_message(args.message, "ascii")
                priv = rsasim.RSAPrivKey(args.modulus, args.priv_exponent)
                clear = rsasim.decrypt_text(message.strip().encode("ascii"), priv, args.encoding)
                pspr("Cleartext:")
                print(clear)
            case "demo":
                if not run_demo():
                    print("Round trip failed!")
                    sys.exit(1)
                print("Round trip successful!")
    except (ValueError, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using the RSA simulator!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
