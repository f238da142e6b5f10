import io
import traceback

from movetag.movetag_cli import PARSERS, parse_input, render_result
from movetag.movetag_constants import MAX_TYPE_TAG_NESTING
from movetag.movetag_lexer import tokenize

HELP_TEXT = (
    "Commands:\n"
    "  mode <kind>    switch parser, one of: " + ", ".join(PARSERS) + "\n"
    "  verbose-mode   toggle token stream output\n"
    "  help           show this message\n"
    "  exit | quit    leave the REPL\n"
    "Anything else is parsed with the current parser."
)


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def handle_mode_command(src: str, kind: str) -> str | None:
    """Returns the new parser kind for a `mode <kind>` command, None for other input."""
    if src.lower() != "mode" and not src.lower().startswith("mode "):
        return None
    requested = src[4:].strip()
    if requested == "":
        print(f"[mode] >>> Current mode: {kind}")
        return kind
    if requested not in PARSERS:
        print(f"[error] >>> Unknown mode: {requested}. Choose from: {', '.join(PARSERS)}")
        return kind
    print(f"[mode] >>> Parsing {requested}")
    return requested


def start_repl(
    kind: str = "type-tag", verbose: bool = False, max_depth: int = MAX_TYPE_TAG_NESTING
) -> None:
    print(f"movetag REPL [mode={kind}]. Type 'help' for commands, 'exit' or 'quit' to leave.")

    while True:
        try:
            src_lines: list[str] = []
            angle_count = 0
            while True:
                prompt = ">>> " if not src_lines else "... "
                line = input(prompt)
                if line.strip() in ("exit", "quit") and not src_lines:
                    print("Exiting movetag REPL.")
                    return
                src_lines.append(line)
                angle_count += line.count("<") - line.count(">")
                # Keep reading while a type parameter list is still open
                if angle_count <= 0:
                    break
            src = " ".join(src_lines).strip()
            if not src or src.startswith("#"):
                continue
            if src.lower() == "help":
                print(HELP_TEXT)
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            new_kind = handle_mode_command(src, kind)
            if new_kind is not None:
                kind = new_kind
                continue

            try:
                if verbose:
                    print(f"[tokens] >>> {tokenize(src)}")
                result = parse_input(src, kind, max_depth)
            except ValueError as e:
                print(f"[error] >>> {e}")
                if verbose:
                    print_traceback()
                continue

            print(render_result(result))

        except (KeyboardInterrupt, EOFError):
            print("\nExiting movetag REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
