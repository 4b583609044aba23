import io
import os

import pytest

from Shell.builtin import cd_target, execute_builtin
from Shell.command import BuiltinKind, Cd, Echo, Exit, Pwd, Type, TypeBuiltin, TypeLocal, TypeUnknown
from Shell.errors import CdTargetMissing, MissingRequiredEnvironmentVariable, WorkingDirectoryUnavailable
from Shell.path_resolver import ResolvedPath


def run(command, environ=None, last_status=0):
    out, err = io.StringIO(), io.StringIO()
    status = execute_builtin(command, out, err, environ or {}, last_status)
    return status, out.getvalue(), err.getvalue()


def test_echo_joins_with_single_spaces():
    assert run(Echo(("hello", "world  script", "x"))) == (0, "hello world  script x\n", "")


def test_echo_without_arguments():
    assert run(Echo()) == (0, "\n", "")


def test_type_outputs():
    assert run(Type(TypeBuiltin("echo", BuiltinKind.ECHO)))[1] == "echo is a shell builtin\n"
    assert run(Type(TypeLocal("ls", ResolvedPath("/bin/ls"))))[1] == "ls is /bin/ls\n"
    assert run(Type(TypeUnknown("nonexistent_cmd_xyz"))) == (
        1,
        "",
        "nonexistent_cmd_xyz: not found\n",
    )
    assert run(Type()) == (0, "", "")


def test_pwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert run(Pwd()) == (0, os.getcwd() + "\n", "")


def test_cd_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir("/")
    assert run(Cd(str(tmp_path)))[0] == 0
    assert os.path.samefile(os.getcwd(), str(tmp_path))


def test_cd_relative(tmp_path, monkeypatch):
    (tmp_path / "sub").mkdir()
    monkeypatch.chdir(tmp_path)
    run(Cd("sub"))
    assert os.path.samefile(os.getcwd(), str(tmp_path / "sub"))
    run(Cd(".."))
    assert os.path.samefile(os.getcwd(), str(tmp_path))


@pytest.mark.parametrize("path", [None, "", "~"])
def test_cd_home(path, tmp_path, monkeypatch):
    monkeypatch.chdir("/")
    run(Cd(path), environ={"HOME": str(tmp_path)})
    assert os.path.samefile(os.getcwd(), str(tmp_path))


def test_cd_under_home(tmp_path, monkeypatch):
    (tmp_path / "docs").mkdir()
    monkeypatch.chdir("/")
    run(Cd("~/docs"), environ={"HOME": str(tmp_path)})
    assert os.path.samefile(os.getcwd(), str(tmp_path / "docs"))


def test_cd_missing_directory_keeps_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    missing = "/non-existing-directory-xyz"
    with pytest.raises(CdTargetMissing) as info:
        run(Cd(missing))
    assert str(info.value) == f"cd: {missing}: No such file or directory"
    assert os.path.samefile(os.getcwd(), str(tmp_path))


def test_cd_into_file(tmp_path, monkeypatch):
    (tmp_path / "f").write_text("")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(CdTargetMissing) as info:
        run(Cd("f"))
    assert info.value.reason == "Not a directory"


def test_cd_without_home():
    with pytest.raises(MissingRequiredEnvironmentVariable) as info:
        cd_target("~", {})
    assert str(info.value) == "cd: HOME not set"


def test_cd_target_leaves_plain_paths():
    assert cd_target("/tmp", {}) == "/tmp"
    assert cd_target("a~b", {}) == "a~b"


def test_exit_status():
    assert run(Exit()) == (0, "", "")
    assert run(Exit(), last_status=5)[0] == 5
    assert run(Exit(("3",)))[0] == 3
    assert run(Exit(("256",)))[0] == 0


def test_exit_non_numeric():
    status, _, err = run(Exit(("abc",)))
    assert status == 2
    assert err == "exit: abc: numeric argument required\n"


def test_cd_symlink_loop_keeps_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    os.symlink("loop", str(tmp_path / "loop"))
    with pytest.raises(CdTargetMissing) as info:
        run(Cd("loop"))
    assert str(info.value).startswith("cd: loop: ")
    assert os.path.samefile(os.getcwd(), str(tmp_path))


def test_cd_name_too_long(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(CdTargetMissing):
        run(Cd("a" * 5000))
    assert os.path.samefile(os.getcwd(), str(tmp_path))


def test_cd_embedded_nul(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(CdTargetMissing) as info:
        run(Cd("a\x00b"))
    assert info.value.reason == "Invalid argument"


def test_pwd_in_removed_directory(tmp_path, monkeypatch):
    gone = tmp_path / "gone"
    gone.mkdir()
    monkeypatch.chdir(gone)
    gone.rmdir()
    with pytest.raises(WorkingDirectoryUnavailable) as info:
        run(Pwd())
    assert str(info.value).startswith("pwd: ")
