#!/usr/bin/env python3
"""
MiniShell Lite - Python 3
Features:
 - Builtins: cd, echo, exit, pwd, type
 - External commands found on PATH, run via subprocess
 - POSIX quoting: '...', "...", backslash escapes
 - Output redirection: >, 1>, 2>
 - Line editing (readline)
 - Ctrl+C handling (does not kill the shell)
"""

import sys

from Shell.shell import main

if __name__ == "__main__":
    sys.exit(main())
