import os
import sys

from Shell import config, log
from Shell.command import BuiltinKind, dispatch
from Shell.errors import MissingRequiredEnvironmentVariable, ShellError
from Shell.executor import execute
from Shell.line_input import init_readline, read_line
from Shell.path_resolver import default_resolver, path_env_from

# Global state
last_status = 0


def process_line(line, stdout=None, stderr=None, environ=None, resolver=None):
    """
    Tokenize, classify and run one input line.
    Returns: False once the shell should stop, True otherwise
    """
    global last_status
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    environ = os.environ if environ is None else environ

    try:
        command, redirection = dispatch(
            line, path_env_from(environ), resolver or default_resolver
        )
        if command is None:
            return True
        log.debug(f"dispatching {command!r} {redirection!r}")
        status = execute(command, redirection, stdout, stderr, environ, last_status)
    except ShellError as e:
        print(e, file=stderr)
        last_status = e.status
        return True

    last_status = status
    return command.kind is not BuiltinKind.EXIT


def main_loop(stdin=None, stdout=None, stderr=None, environ=None):
    """
    Read and run lines until exit or end of input.
    Returns: status the shell exits with
    """
    global last_status
    last_status = 0
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    if stdin is sys.stdin:
        init_readline()

    while True:
        try:
            line = read_line(config.PROMPT, stdin, stdout)
        except EOFError:
            break
        except KeyboardInterrupt:
            # Ctrl+C at the prompt only starts a new line
            print(file=stdout)
            continue

        if not line.strip():
            continue

        if not process_line(line, stdout, stderr, environ):
            break

    return last_status


def main():
    """Entry point: refuse to start without PATH, then run the REPL"""
    try:
        path_env_from(os.environ)
    except MissingRequiredEnvironmentVariable as e:
        print(e, file=sys.stderr)
        return 1
    return main_loop()
