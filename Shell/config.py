import os


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("", "0", "false", "no", "off")


SHELL_NAME = "minishell"

# Prompt printed before every line
PROMPT = os.getenv("MINISHELL_PROMPT", "$ ")

# Cache PATH directory listings between lookups
PATH_CACHE = _env_flag("MINISHELL_PATH_CACHE", True)

# Print debug diagnostics to stderr
DEBUG = _env_flag("MINISHELL_DEBUG", False)

# Encoding used for redirection files and captured child output
REDIRECT_ENCODING = "utf-8"
