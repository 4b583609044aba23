"""
Command classification.

A tokenized line becomes exactly one Command value. Builtins are small
frozen dataclasses tagged with a BuiltinKind, anything else resolves on
PATH into an External command or fails with CommandNotFound.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from Shell import path_resolver
from Shell.errors import CommandNotFound
from Shell.parser import extract_redirections, tokenize
from Shell.path_resolver import ResolvedPath


class BuiltinKind(Enum):
    EXIT = "exit"
    ECHO = "echo"
    TYPE = "type"
    PWD = "pwd"
    CD = "cd"


BUILTIN_NAMES = {kind.value: kind for kind in BuiltinKind}


# ---------- Commands ----------
@dataclass(frozen=True)
class Exit:
    args: Tuple[str, ...] = ()
    kind = BuiltinKind.EXIT


@dataclass(frozen=True)
class Echo:
    args: Tuple[str, ...] = ()
    kind = BuiltinKind.ECHO


@dataclass(frozen=True)
class Pwd:
    kind = BuiltinKind.PWD


@dataclass(frozen=True)
class Cd:
    path: Optional[str] = None
    kind = BuiltinKind.CD


@dataclass(frozen=True)
class External:
    name: str
    path: ResolvedPath
    args: Tuple[str, ...] = ()
    kind = None

    @property
    def argv(self):
        return [self.name, *self.args]


# ---------- type targets ----------
@dataclass(frozen=True)
class TypeBuiltin:
    name: str
    builtin: BuiltinKind


@dataclass(frozen=True)
class TypeLocal:
    name: str
    path: ResolvedPath


@dataclass(frozen=True)
class TypeUnknown:
    name: str


TypeTarget = Union[TypeBuiltin, TypeLocal, TypeUnknown]


@dataclass(frozen=True)
class Type:
    target: Optional[TypeTarget] = None
    kind = BuiltinKind.TYPE


Command = Union[Exit, Echo, Type, Pwd, Cd, External]


def is_builtin(command):
    return command.kind is not None


def classify(args, path_env, resolver=None):
    """
    Turn a redirection-free argument vector into a Command.
    Raises: CommandNotFound
    """
    resolver = resolver or path_resolver.default_resolver
    name, rest = args[0], tuple(args[1:])
    kind = BUILTIN_NAMES.get(name)

    if kind is BuiltinKind.EXIT:
        return Exit(rest)
    if kind is BuiltinKind.ECHO:
        return Echo(rest)
    if kind is BuiltinKind.PWD:
        return Pwd()
    if kind is BuiltinKind.CD:
        return Cd(rest[0] if rest else None)
    if kind is BuiltinKind.TYPE:
        if not rest:
            return Type()
        return Type(type_target(rest[0], path_env, resolver))

    return External(name, resolver.resolve(name, path_env), rest)


def type_target(name, path_env, resolver=None):
    """Classify name as if it was typed on its own line"""
    try:
        command = classify([name], path_env, resolver)
    except CommandNotFound:
        return TypeUnknown(name)
    if is_builtin(command):
        return TypeBuiltin(name, command.kind)
    return TypeLocal(name, command.path)


def dispatch(line, path_env, resolver=None):
    """
    Tokenize line, split off its redirections and classify what is left.
    Returns: (Command or None for an empty line, RedirectionSpec)
    Raises: UnterminatedQuote, MissingRedirectionTarget, CommandNotFound
    """
    args, redirection = extract_redirections(tokenize(line))
    if not args:
        return None, redirection
    return classify(args, path_env, resolver), redirection
