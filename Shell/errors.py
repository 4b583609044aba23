"""
Shell errors.

Every failure that can happen while handling one input line is a
ShellError. The REPL catches it, prints str(error) to stderr and records
error.status as the status of the line. Only MissingRequiredEnvironmentVariable
raised at startup ends the process.
"""

from Shell.config import SHELL_NAME


class ShellError(Exception):
    """Base class for all line-level errors"""

    status = 1

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class UnterminatedQuote(ShellError):
    """A quote was opened and the line ended before it was closed"""

    status = 2

    def __init__(self, quote):
        super().__init__(
            f"{SHELL_NAME}: unexpected EOF while looking for matching `{quote}'"
        )
        self.quote = quote


class MissingRedirectionTarget(ShellError):
    """A redirection operator is not followed by a filename"""

    status = 2

    def __init__(self, operator):
        super().__init__(
            f"{SHELL_NAME}: syntax error: missing file name after `{operator}'"
        )
        self.operator = operator


class RedirectionTargetUnwritable(ShellError):
    def __init__(self, path, reason):
        super().__init__(f"{SHELL_NAME}: {path}: {reason}")
        self.path = path
        self.reason = reason


class CommandNotFound(ShellError):
    status = 127

    def __init__(self, name):
        super().__init__(f"{name}: command not found")
        self.name = name


class ExternalSpawnFailure(CommandNotFound):
    """
    The executable was resolved but the child process could not be started.
    Reported to the user exactly like an unknown command.
    """

    def __init__(self, name, cause=None):
        super().__init__(name)
        self.cause = cause


class CdTargetMissing(ShellError):
    def __init__(self, path, reason="No such file or directory"):
        super().__init__(f"cd: {path}: {reason}")
        self.path = path
        self.reason = reason


class WorkingDirectoryUnavailable(ShellError):
    def __init__(self, reason):
        super().__init__(f"pwd: cannot read current directory: {reason}")
        self.reason = reason


class PathDirectoryUnreadable(ShellError):
    """One PATH directory could not be listed. Resolution skips it."""

    def __init__(self, directory, reason):
        super().__init__(f"{SHELL_NAME}: cannot search {directory}: {reason}")
        self.directory = directory
        self.reason = reason


class MissingRequiredEnvironmentVariable(ShellError):
    def __init__(self, name, message=None):
        super().__init__(message or f"{SHELL_NAME}: {name} is not set")
        self.name = name
