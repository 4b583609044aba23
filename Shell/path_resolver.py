"""
Executable lookup on PATH.

Directories are searched in PATH order and the first entry whose name
matches exactly wins. A directory that cannot be listed is skipped, it
never stops the search. Listings can be cached; a cached listing is
thrown away as soon as the directory's modification time changes or PATH
itself changes. On filesystems with coarse timestamps a file created in
the same tick as the cached listing can be missed until the directory
changes again; set MINISHELL_PATH_CACHE=0 to always list directories.
"""

from dataclasses import dataclass
import os

from Shell import config, log
from Shell.errors import (
    CommandNotFound,
    MissingRequiredEnvironmentVariable,
    PathDirectoryUnreadable,
)


@dataclass(frozen=True)
class ResolvedPath:
    """Path of an executable plus the name it is shown with"""
    path: str

    @property
    def name(self):
        return os.path.basename(self.path)

    def __str__(self):
        return self.path


def parse_path_env(value):
    """Split a PATH value into its directories, keeping order"""
    # An empty entry is the current directory, as in POSIX shells
    return [entry or "." for entry in value.split(os.pathsep)]


def path_env_from(environ=None):
    """
    Build the search path from the environment.
    Raises: MissingRequiredEnvironmentVariable if PATH is not set
    """
    environ = os.environ if environ is None else environ
    value = environ.get("PATH")
    if value is None:
        raise MissingRequiredEnvironmentVariable("PATH")
    return parse_path_env(value)


def has_path_separator(name):
    return os.sep in name or (os.altsep is not None and os.altsep in name)


def list_directory(directory):
    """
    Returns: set of entry names in directory
    Raises: PathDirectoryUnreadable
    """
    try:
        return set(os.listdir(directory))
    except FileNotFoundError:
        raise PathDirectoryUnreadable(directory, "No such file or directory")
    except NotADirectoryError:
        raise PathDirectoryUnreadable(directory, "Not a directory")
    except PermissionError:
        raise PathDirectoryUnreadable(directory, "Permission denied")
    except OSError as e:
        raise PathDirectoryUnreadable(directory, e.strerror or str(e))


class PathResolver:
    def __init__(self, cache=None):
        self.cache_enabled = config.PATH_CACHE if cache is None else cache
        # directory -> (mtime_ns, entries)
        self._listings = {}
        self._path_env = None
        self._reported = set()

    def resolve(self, name, path_env):
        """
        Find the executable for name.
        Returns: ResolvedPath
        Raises: CommandNotFound
        """
        if has_path_separator(name):
            # Let the OS decide at spawn time
            return ResolvedPath(name)

        if self.cache_enabled and path_env != self._path_env:
            self.invalidate()
            self._path_env = list(path_env)

        for directory in path_env:
            try:
                entries = self._entries(directory)
            except PathDirectoryUnreadable as e:
                self._report(e)
                continue
            if name in entries:
                return ResolvedPath(os.path.join(directory, name))

        raise CommandNotFound(name)

    def invalidate(self):
        """Drop every cached directory listing"""
        self._listings.clear()
        self._path_env = None

    def _entries(self, directory):
        if not self.cache_enabled:
            return list_directory(directory)

        try:
            mtime = os.stat(directory).st_mtime_ns
        except OSError:
            self._listings.pop(directory, None)
            return list_directory(directory)

        cached = self._listings.get(directory)
        if cached is not None and cached[0] == mtime:
            return cached[1]

        entries = list_directory(directory)
        self._listings[directory] = (mtime, entries)
        return entries

    def _report(self, error):
        # Missing PATH directories are common, only mention them when debugging
        if error.reason == "No such file or directory":
            log.debug(f"skipping PATH entry {error.directory}: {error.reason}")
            return
        if error.directory in self._reported:
            return
        self._reported.add(error.directory)
        log.warning(f"skipping PATH entry {error.directory}: {error.reason}")


# Shared by the REPL so cached listings survive between lines
default_resolver = PathResolver()
