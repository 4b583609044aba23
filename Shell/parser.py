from dataclasses import dataclass
from enum import Enum
from typing import Optional
import os

from Shell import config
from Shell.errors import (
    MissingRedirectionTarget,
    RedirectionTargetUnwritable,
    UnterminatedQuote,
)

# Characters a backslash escapes inside double quotes
DOUBLE_QUOTE_ESCAPES = '\\$`"'

# Only these split words, other whitespace is an ordinary character
FIELD_SEPARATORS = " \t\n"

STDOUT_OPERATORS = (">", "1>")
STDERR_OPERATORS = ("2>",)
REDIRECTION_OPERATORS = STDOUT_OPERATORS + STDERR_OPERATORS


class State(Enum):
    NORMAL = "normal"
    SINGLE_QUOTE = "single-quote"
    DOUBLE_QUOTE = "double-quote"
    ESCAPING = "escaping"
    DOUBLE_ESCAPING = "double-escaping"


def tokenize(line):
    """
    Split a command line into arguments.

    Single quotes keep everything literal. Inside double quotes a backslash
    only escapes \\ $ ` and ", otherwise it is kept. Outside quotes a
    backslash escapes the next character. Quoted and unquoted pieces with
    no whitespace between them form one argument, and an empty pair of
    quotes is an empty argument.

    A backslash at the very end of the line is dropped.

    Returns: list of arguments
    Raises: UnterminatedQuote
    """
    args = []
    current = []
    # True once the current token has started, even if it is still empty ('')
    started = False
    state = State.NORMAL

    for ch in line:
        if state is State.NORMAL:
            if ch in FIELD_SEPARATORS:
                if started:
                    args.append("".join(current))
                    current = []
                    started = False
            elif ch == "\\":
                state = State.ESCAPING
            elif ch == "'":
                state = State.SINGLE_QUOTE
                started = True
            elif ch == '"':
                state = State.DOUBLE_QUOTE
                started = True
            else:
                current.append(ch)
                started = True

        elif state is State.ESCAPING:
            current.append(ch)
            started = True
            state = State.NORMAL

        elif state is State.SINGLE_QUOTE:
            if ch == "'":
                state = State.NORMAL
            else:
                current.append(ch)

        elif state is State.DOUBLE_QUOTE:
            if ch == '"':
                state = State.NORMAL
            elif ch == "\\":
                state = State.DOUBLE_ESCAPING
            else:
                current.append(ch)

        else:  # State.DOUBLE_ESCAPING
            if ch not in DOUBLE_QUOTE_ESCAPES:
                current.append("\\")
            current.append(ch)
            state = State.DOUBLE_QUOTE

    if state is State.SINGLE_QUOTE:
        raise UnterminatedQuote("'")
    if state in (State.DOUBLE_QUOTE, State.DOUBLE_ESCAPING):
        raise UnterminatedQuote('"')

    if started:
        args.append("".join(current))
    return args


# ---------- Redirection ----------
@dataclass(frozen=True)
class RedirectionSpec:
    """Output files for one command. None means the shell's own stream."""
    stdout: Optional[str] = None
    stderr: Optional[str] = None

    def __bool__(self):
        return self.stdout is not None or self.stderr is not None


def extract_redirections(args):
    """
    Remove redirection operators and their file names from args.
    Returns: (args: list, RedirectionSpec)
    Raises: MissingRedirectionTarget
    """
    targets = {"stdout": None, "stderr": None}
    remove = []

    i = 0
    while i < len(args):
        tok = args[i]
        if tok not in REDIRECTION_OPERATORS:
            i += 1
            continue

        if i + 1 >= len(args) or args[i + 1] in REDIRECTION_OPERATORS:
            raise MissingRedirectionTarget(tok)

        stream = "stdout" if tok in STDOUT_OPERATORS else "stderr"
        targets[stream] = args[i + 1]
        remove.extend((i, i + 1))
        i += 2

    cleaned = list(args)
    for idx in sorted(remove, reverse=True):
        del cleaned[idx]

    return cleaned, RedirectionSpec(**targets)


def open_redirections(spec):
    """
    Open the files named by spec, truncating them.
    Returns: (stdout_file or None, stderr_file or None)
    Raises: RedirectionTargetUnwritable
    """
    opened = []
    try:
        for path in (spec.stdout, spec.stderr):
            if path is None:
                opened.append(None)
                continue
            if opened and opened[0] is not None and _same_target(path, spec.stdout):
                # 1> f 2> f share one file instead of clobbering each other
                opened.append(opened[0])
                continue
            opened.append(_open_target(path))
    except RedirectionTargetUnwritable:
        close_redirections(*opened)
        raise
    return tuple(opened)


def close_redirections(*files):
    closed = set()
    for f in files:
        if f is None or id(f) in closed:
            continue
        closed.add(id(f))
        f.close()


def _target_key(path):
    return os.path.realpath(os.path.expanduser(path))


def _same_target(a, b):
    try:
        return _target_key(a) == _target_key(b)
    except (OSError, ValueError):
        return a == b


def _open_target(path):
    try:
        return open(
            os.path.expanduser(path), "w", encoding=config.REDIRECT_ENCODING
        )
    except FileNotFoundError:
        raise RedirectionTargetUnwritable(path, "No such file or directory")
    except IsADirectoryError:
        raise RedirectionTargetUnwritable(path, "Is a directory")
    except PermissionError:
        raise RedirectionTargetUnwritable(path, "Permission denied")
    except OSError as e:
        raise RedirectionTargetUnwritable(path, e.strerror or str(e))
    except ValueError:
        # embedded NUL
        raise RedirectionTargetUnwritable(path, "Invalid argument")
