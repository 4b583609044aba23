import io
import os
import subprocess
import sys

import psutil

from Shell import config, log
from Shell.builtin import execute_builtin
from Shell.command import is_builtin
from Shell.errors import ExternalSpawnFailure, ShellError
from Shell.parser import close_redirections, open_redirections

# Status reported for a child interrupted with Ctrl+C
INTERRUPTED_STATUS = 130


def _child_stream(stream):
    """
    Decide what to hand to Popen for one output stream.
    Returns: stream itself if it has a file descriptor, otherwise PIPE
    """
    try:
        stream.fileno()
    except (AttributeError, ValueError, io.UnsupportedOperation):
        return subprocess.PIPE
    stream.flush()
    return stream


def _write_captured(data, stream):
    if data:
        stream.write(data.decode(config.REDIRECT_ENCODING, errors="replace"))
        stream.flush()


def terminate_process_tree(pid, timeout=3):
    """Terminate a child and everything it started, killing what does not exit"""
    try:
        parent = psutil.Process(pid)
    except psutil.NoSuchProcess:
        return
    procs = parent.children(recursive=True) + [parent]
    for p in procs:
        try:
            p.terminate()
        except psutil.NoSuchProcess:
            pass
    _, alive = psutil.wait_procs(procs, timeout=timeout)
    for p in alive:
        try:
            p.kill()
        except psutil.NoSuchProcess:
            pass


def run_external(command, stdout, stderr, environ=None):
    """
    Run an external command and wait for it.
    Returns: exit_code
    Raises: ExternalSpawnFailure
    """
    child_out = _child_stream(stdout)
    child_err = _child_stream(stderr)

    try:
        proc = subprocess.Popen(
            command.argv,
            executable=command.path.path,
            stdout=child_out,
            stderr=child_err,
            env=environ,
        )
    except (OSError, ValueError) as e:
        log.debug(f"failed to execute {command.path}: {e}")
        raise ExternalSpawnFailure(command.name, e)

    log.debug(f"started {command.name} as pid {proc.pid}")
    try:
        out, err = proc.communicate()
    except KeyboardInterrupt:
        terminate_process_tree(proc.pid)
        proc.wait()
        print(file=stderr)
        return INTERRUPTED_STATUS

    _write_captured(out, stdout)
    _write_captured(err, stderr)
    return proc.returncode


def execute(command, redirection, stdout=None, stderr=None, environ=None, last_status=0):
    """
    Run one classified command with its redirections applied.

    Redirection files are opened here and always closed before returning.
    Errors from the command itself are written to its (possibly redirected)
    stderr.

    Returns: exit_code
    Raises: RedirectionTargetUnwritable
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    environ = os.environ if environ is None else environ

    out_f, err_f = open_redirections(redirection)
    try:
        out = out_f or stdout
        err = err_f or stderr
        try:
            if is_builtin(command):
                return execute_builtin(command, out, err, environ, last_status)
            return run_external(command, out, err, environ)
        except ShellError as e:
            print(e, file=err)
            return e.status
    finally:
        close_redirections(out_f, err_f)
