"""
movetag CLI Entrypoint.

This module provides the command-line interface for parsing Move type tags and
transaction arguments.

Features:
    - Parse text given on the command line, or every line of a file.
    - Choose what to parse: a type tag, a list of type tags, a struct tag, one or
      more transaction arguments, or a list of names.
    - Print the canonical rendering or JSON, to the console or a file.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    movetag "0x1::coin::Coin<u64>"
    movetag -k arguments "1u8, true, x\"beef\"" -j
    movetag -k struct-tag -f tags.txt -o canonical.txt
    movetag --repl --verbose

Functions:
    parse_input(text: str, kind: str, max_depth: int) -> Any:
        Parses one input with the parser selected by `kind`.

    render_result(result: Any, as_json: bool = False) -> str:
        Renders a parse result as canonical text or JSON.

    run_movetag(source: str, is_file: bool = False, kind: str = "type-tag", ...) -> str:
        Runs the full pipeline (read → parse → render → output).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import sys
from collections.abc import Callable
from typing import Any

from movetag.movetag_constants import MAX_TYPE_TAG_NESTING
from movetag.movetag_parser import (
    parse_string_list,
    parse_struct_tag,
    parse_transaction_argument,
    parse_transaction_arguments,
    parse_type_tag,
    parse_type_tags,
)

PARSERS: dict[str, Callable[[str, int], Any]] = {
    "type-tag": parse_type_tag,
    "type-tags": parse_type_tags,
    "struct-tag": parse_struct_tag,
    "argument": lambda text, max_depth: parse_transaction_argument(text),
    "arguments": lambda text, max_depth: parse_transaction_arguments(text),
    "names": lambda text, max_depth: parse_string_list(text),
}


def parse_input(text: str, kind: str, max_depth: int = MAX_TYPE_TAG_NESTING) -> Any:
    """
    Parse `text` with the parser registered for `kind`.

    Raises:
        ValueError: If `kind` is unknown.
        ParseError: If the text is rejected.
    """
    if kind not in PARSERS:
        raise ValueError(f"Unknown input kind: {kind}")
    return PARSERS[kind](text, max_depth)


def _to_plain(value: Any) -> Any:
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    if isinstance(value, str):
        return value
    return value.to_dict()


def render_result(result: Any, as_json: bool = False) -> str:
    """Render a parse result as canonical text, or as JSON built from `to_dict()`."""
    if as_json:
        return json.dumps(_to_plain(result))
    if isinstance(result, list):
        return ", ".join(str(item) for item in result)
    return str(result)


def run_movetag(
    source: str,
    is_file: bool = False,
    kind: str = "type-tag",
    out: str | None = None,
    as_json: bool = False,
    pretty: bool = False,
    max_depth: int = MAX_TYPE_TAG_NESTING,
) -> str:
    """
    Run the movetag pipeline: read, parse, render, and print or write the output.

    Args:
        source (str): The text to parse, or a file path when `is_file` is set.
        is_file (bool): Parse every non-empty line of the file at `source` that does
            not start with `#`. Defaults to False.
        kind (str): Parser to use, one of `PARSERS`. Defaults to 'type-tag'.
        out (str | None): Optional path to write the output. If None, prints to stdout.
        as_json (bool): Render results as JSON. Defaults to False.
        pretty (bool): Print banners around the output. Defaults to False.
        max_depth (int): Type tag nesting limit.

    Returns:
        str: The rendered output, one line per input.

    Raises:
        ParseError: If any input is rejected; nothing is printed in that case.
    """
    # 1. Read inputs
    if is_file:
        with open(source, encoding="utf-8") as f:
            inputs = [
                line.strip()
                for line in f
                if line.strip() and not line.strip().startswith("#")
            ]
    else:
        inputs = [source]

    # 2. Parse and render
    output = "\n".join(
        render_result(parse_input(text, kind, max_depth), as_json) for text in inputs
    )

    # 3. Output result
    if pretty:
        banner = "=" * 20
        print(f"{banner}\nParsed {kind}\n{banner}\n{output}\n{banner}\n")
    elif not out:
        print(output)

    # 4. Optional write to file
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        if pretty:
            print(f"(wrote to {out})")

    return output


def main() -> None:
    """
    Entry point for the movetag CLI.

    Dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise parses the source and prints the result. A parse failure is reported
      on stderr as `error: <message>` with exit status 1.

    Supported flags:
        - `-f`, `--file`: Interpret source as a file with one input per line.
        - `-k`, `--kind`: What to parse (default: type-tag).
        - `-j`, `--json`: Print JSON instead of canonical text.
        - `-o`, `--out`: Write output to a file.
        - `-p`, `--pretty`: Show output with banners.
        - `--max-depth`: Type tag nesting limit.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Verbose REPL mode.
    """
    if len(sys.argv) == 1:
        from movetag.movetag_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="movetag")
    parser.add_argument("source", nargs="?", help="Text to parse, or filename (with -f)")
    parser.add_argument(
        "-f", "--file", action="store_true", help="Interpret source as a file path"
    )
    parser.add_argument(
        "-k",
        "--kind",
        choices=tuple(PARSERS),
        default="type-tag",
        help="What to parse (default: type-tag)",
    )
    parser.add_argument(
        "-j", "--json", dest="as_json", action="store_true", help="Print JSON"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_TYPE_TAG_NESTING,
        help=f"Type tag nesting limit (default: {MAX_TYPE_TAG_NESTING})",
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL instead of parsing"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from movetag.movetag_repl import start_repl

        start_repl(kind=args.kind, verbose=args.verbose, max_depth=args.max_depth)
        return

    try:
        run_movetag(
            source=args.source,
            is_file=args.file,
            kind=args.kind,
            out=args.out,
            as_json=args.as_json,
            pretty=args.pretty,
            max_depth=args.max_depth,
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
