import sys

from Shell import config


def warning(message, stream=None):
    """Print a warning line to stderr"""
    print(f"Warning: {message}", file=stream or sys.stderr)


def debug(message, stream=None):
    """Print a debug line to stderr when MINISHELL_DEBUG is on"""
    if config.DEBUG:
        print(f"[{config.SHELL_NAME}] {message}", file=stream or sys.stderr)
