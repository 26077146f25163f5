"""
BL CLI Entrypoint.

Parses a BL program from a `.bl` file or an inline string and prints it back in
canonical form.

Features:
    - Read source from `.bl` files or inline strings.
    - Tokenize and parse into a Program.
    - Print the pretty-printed program, the token list, or a JSON dump.
    - Optionally write the output to a file.

Example usage:
    bl hop.bl
    bl -s "PROGRAM p IS BEGIN move END p"
    bl hop.bl --nested --strict -o hop.pretty.bl
    bl hop.bl --json -v

Functions:
    run_bl(source, is_string=False, out=None, show_tokens=False, as_json=False,
           strict=False, nested=False) -> str:
        Executes the pipeline (tokenize → parse → format → output).

    main(argv=None) -> int:
        Parses CLI arguments, runs the pipeline, and reports parse errors.
"""

import argparse
import json
import logging
import sys

from bl.bl_lexer import tokenize
from bl.bl_parser import ParseError, Parser
from bl.emitters.pretty_emitter import pretty_print


def run_bl(
    source: str,
    is_string: bool = False,
    out: str | None = None,
    show_tokens: bool = False,
    as_json: bool = False,
    strict: bool = False,
    nested: bool = False,
) -> str:
    """
    Run the BL toolchain: tokenize, parse, format, and print or write the result.

    Args:
        source (str): BL source code or a path to a `.bl` file.
        is_string (bool): Treat `source` as raw code instead of a file path.
        out (str | None): Path to write the output to. Printed to stdout if None.
        show_tokens (bool): Output the token list instead of the parsed program.
        as_json (bool): Output the parsed program as JSON.
        strict (bool): Parse in strict mode.
        nested (bool): Parse IF / WHILE statements in bodies.

    Returns:
        str: The produced output text.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.bl'.
        ParseError: If the program is malformed.
    """
    if not is_string and not source.endswith(".bl"):
        raise ValueError("Only .bl files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    tokens = tokenize(source)

    if show_tokens:
        text = "\n".join(f"{tok.line}:{tok.col}\t{tok.type}\t{tok.value}" for tok in tokens)
    else:
        program = Parser(tokens, strict=strict, nested=nested).parse()
        if as_json:
            text = json.dumps(program.to_dict(), indent=2)
        else:
            text = pretty_print(program).rstrip("\n")

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)
    return text


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the BL CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream and stop.
        - `--json`: Print the parsed program as JSON.
        - `--strict`: Validate instruction `IS`/closing names and call tokens.
        - `--nested`: Parse IF / WHILE statements inside bodies.
        - `-o`, `--out`: Write output to a file.
        - `-v`, `--verbose`: Log parser progress to stderr.

    Returns:
        int: Process exit status (0 on success, 1 on a parse error).
    """
    parser = argparse.ArgumentParser(prog="bl")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", dest="show_tokens", action="store_true", help="Print tokens only"
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print program as JSON"
    )
    parser.add_argument(
        "--strict", action="store_true", help="Validate instruction names and calls"
    )
    parser.add_argument(
        "--nested", action="store_true", help="Parse IF/WHILE statements in bodies"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log parser progress"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        run_bl(
            source=args.source,
            is_string=args.string,
            out=args.out,
            show_tokens=args.show_tokens,
            as_json=args.as_json,
            strict=args.strict,
            nested=args.nested,
        )
    except ParseError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    sys.exit(main())
