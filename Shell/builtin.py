import os

from Shell.command import (
    BuiltinKind,
    TypeBuiltin,
    TypeLocal,
    TypeUnknown,
)
from Shell.errors import (
    CdTargetMissing,
    MissingRequiredEnvironmentVariable,
    WorkingDirectoryUnavailable,
)


def builtin_exit(command, stderr, last_status=0):
    """
    Work out the status the shell exits with.
    Returns: exit status
    """
    if not command.args:
        return last_status
    try:
        return int(command.args[0]) & 0xFF
    except ValueError:
        print(f"exit: {command.args[0]}: numeric argument required", file=stderr)
        return 2


def builtin_echo(command, stdout):
    """Print the arguments separated by single spaces"""
    print(" ".join(command.args), file=stdout)
    return 0


def builtin_type(command, stdout, stderr):
    """Describe how a name would be run"""
    target = command.target
    if target is None:
        return 0
    if isinstance(target, TypeBuiltin):
        print(f"{target.name} is a shell builtin", file=stdout)
        return 0
    if isinstance(target, TypeLocal):
        print(f"{target.name} is {target.path}", file=stdout)
        return 0
    assert isinstance(target, TypeUnknown)
    print(f"{target.name}: not found", file=stderr)
    return 1


def builtin_pwd(command, stdout):
    """
    Print the working directory.
    Raises: WorkingDirectoryUnavailable if it was removed underneath us
    """
    try:
        cwd = os.getcwd()
    except OSError as e:
        raise WorkingDirectoryUnavailable(e.strerror or str(e))
    print(cwd, file=stdout)
    return 0


def cd_target(path, environ):
    """
    Expand ~ and the empty path to $HOME.
    Raises: MissingRequiredEnvironmentVariable
    """
    if path and path != "~" and not path.startswith("~/"):
        return path

    home = environ.get("HOME")
    if not home:
        raise MissingRequiredEnvironmentVariable("HOME", "cd: HOME not set")
    if path and path.startswith("~/"):
        return os.path.join(home, path[2:])
    return home


def builtin_cd(command, environ):
    """
    Change directory. The working directory is left alone on failure.
    Raises: CdTargetMissing, MissingRequiredEnvironmentVariable
    """
    target = cd_target(command.path, environ)
    try:
        os.chdir(target)
    except FileNotFoundError:
        raise CdTargetMissing(target)
    except NotADirectoryError:
        raise CdTargetMissing(target, "Not a directory")
    except PermissionError:
        raise CdTargetMissing(target, "Permission denied")
    except OSError as e:
        raise CdTargetMissing(target, e.strerror or str(e))
    except ValueError:
        raise CdTargetMissing(target, "Invalid argument")
    return 0


def execute_builtin(command, stdout, stderr, environ=None, last_status=0):
    """
    Run a builtin command.
    Returns: exit_code
    Raises: ShellError subclasses for cd and pwd failures
    """
    environ = os.environ if environ is None else environ
    kind = command.kind

    if kind is BuiltinKind.EXIT:
        return builtin_exit(command, stderr, last_status)
    if kind is BuiltinKind.ECHO:
        return builtin_echo(command, stdout)
    if kind is BuiltinKind.TYPE:
        return builtin_type(command, stdout, stderr)
    if kind is BuiltinKind.PWD:
        return builtin_pwd(command, stdout)
    if kind is BuiltinKind.CD:
        return builtin_cd(command, environ)
    raise ValueError(f"not a builtin: {command!r}")
