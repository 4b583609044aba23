import sys

try:
    import readline
except ImportError:
    readline = None

from Shell import log


def init_readline():
    """Set up readline so the prompt edits like a Linux terminal"""
    if readline is None or not sys.stdin.isatty():
        return False

    try:
        readline.parse_and_bind("set editing-mode emacs")

        # Arrow keys walk this session's lines
        readline.parse_and_bind("\\e[A: previous-history")
        readline.parse_and_bind("\\e[B: next-history")

        # Ctrl+Left/Right jump between words
        readline.parse_and_bind("\\e[1;5D: backward-word")
        readline.parse_and_bind("\\e[1;5C: forward-word")

        # No completion function is registered, so tab inserts itself
        readline.parse_and_bind("tab: self-insert")
    except Exception as e:
        log.warning(f"Could not configure readline: {e}")
        return False
    return True


def read_line(prompt, stdin=None, stdout=None):
    """
    Print the prompt and read one line without its newline.
    Raises: EOFError at end of input
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    if stdin is sys.stdin and stdout is sys.stdout:
        # input() goes through readline when it is loaded
        return input(prompt)

    stdout.write(prompt)
    stdout.flush()
    line = stdin.readline()
    if not line:
        raise EOFError
    return line.rstrip("\n")
