"""Tests for load/parse and the python-dotenv-style SDK (load_dotenv, dotenv_values)."""

from __future__ import annotations

import importlib
import os
import sys

import pytest

from dotenvkit import (
    InvalidPathError,
    LoadOptions,
    MissingKeysError,
    ParseOptions,
    SourceNotFoundError,
    SourceReadError,
    UnsetExportError,
    dotenv_values,
    environment_files,
    load,
    load_dotenv,
    parse,
)
from dotenvkit.environ import MappingEnviron
from dotenvkit.sdk import apply_values, compose_values

PLAIN_VALUES = {
    "PLAIN": "true",
    "OPTION_A": "1",
    "OPTION_B": "2",
    "OPTION_C": "3",
    "OPTION_D": "4",
    "OPTION_E": "5",
}


def test_load_dotenv_import():
    """from dotenvkit import load_dotenv works."""
    from dotenvkit import load_dotenv as ld

    assert callable(ld)


def test_environment_files_suite():
    assert environment_files("development") == [
        ".env.development.local",
        ".env.local",
        ".env.development",
        ".env",
    ]


def test_environment_files_test_skips_local():
    assert environment_files("test") == [".env.test.local", ".env.test", ".env"]


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------

def test_load_defaults_to_dotenv(testdata, environ):
    load(environ=environ)
    assert environ.data == {"DOTENV": "true"}


def test_load_empty_file_list(testdata, environ):
    load(LoadOptions(files=[]), environ=environ)
    assert environ.data == {}


def test_load_missing_file_is_skipped(testdata, environ):
    load(LoadOptions(files=[".env.does_not_exist"]), environ=environ)
    assert environ.data == {}


def test_load_multiple_files(testdata, environ):
    load(LoadOptions(files=[".env", "plain.env"]), environ=environ)
    assert environ.data == {"DOTENV": "true", **PLAIN_VALUES}


def test_load_does_not_overwrite_environ(testdata):
    environ = MappingEnviron({"DOTENV": "false"})
    written = load(LoadOptions(files=[".env"]), environ=environ)
    assert written == 0
    assert environ.data == {"DOTENV": "false"}


def test_load_multiple_files_does_not_overwrite_environ(testdata):
    environ = MappingEnviron({"OPTION_A": "predefined"})
    load(LoadOptions(files=[".env", "plain.env"]), environ=environ)
    assert environ.data == {"DOTENV": "true", **PLAIN_VALUES, "OPTION_A": "predefined"}


def test_load_overload(testdata):
    environ = MappingEnviron({"DOTENV": "false"})
    load(LoadOptions(files=[".env"], overload=True), environ=environ)
    assert environ.data == {"DOTENV": "true"}


def test_load_overload_multiple_files(testdata):
    environ = MappingEnviron({"PLAIN": "false", "DOTENV": "false"})
    load(LoadOptions(files=[".env", "plain.env"], overload=True), environ=environ)
    assert environ.data == {"DOTENV": "true", **PLAIN_VALUES}


def test_load_missing_required_file_raises(testdata, environ):
    options = LoadOptions(files=[".env", ".env.does_not_exist"], all_files_required=True)
    with pytest.raises(SourceNotFoundError) as exc_info:
        load(options, environ=environ)
    assert ".env.does_not_exist" in str(exc_info.value)
    assert isinstance(exc_info.value, FileNotFoundError)


def test_load_required_keys_present(testdata):
    environ = MappingEnviron({"DOTENV": "false"})
    load(LoadOptions(files=[".env"], required_keys=["DOTENV"]), environ=environ)
    assert environ.data == {"DOTENV": "false"}


def test_load_missing_required_keys_reported_together(testdata, environ):
    options = LoadOptions(files=[".env"], required_keys=["TEST", "DOTENV", "OTHER"])
    with pytest.raises(MissingKeysError) as exc_info:
        load(options, environ=environ)
    assert exc_info.value.keys == ["TEST", "OTHER"]
    assert str(exc_info.value) == "missing required configuration key(s): TEST, OTHER"


def test_load_multiple_paths(testdata, environ):
    load(LoadOptions(paths=[".", "nested"]), environ=environ)
    assert environ.data == {"DOTENV": "true", "NESTED": "true"}


def test_load_invalid_path_always_raises(testdata, environ):
    with pytest.raises(InvalidPathError):
        load(LoadOptions(paths=["does_not_exist"]), environ=environ)
    with pytest.raises(InvalidPathError):
        load(LoadOptions(paths=["plain.env"]), environ=environ)


def test_load_environment_development(testdata, environ):
    load(LoadOptions(files=environment_files("development")), environ=environ)
    assert environ.data == {
        "DOTENV": "development-local",
        "DOTENVDEVELOPMENT": "true",
        "DOTENVDEVELOPMENTLOCAL": "true",
        "DOTENVLOCAL": "true",
    }


def test_load_environment_test(testdata, environ):
    load(LoadOptions(files=environment_files("test")), environ=environ)
    assert environ.data == {"DOTENV": "test", "DOTENVTEST": "true"}


def test_load_later_source_sees_applied_values(testdata, environ):
    (testdata / "ref.env").write_text("REF=${DOTENV}-ref\n")
    load(LoadOptions(files=[".env", "ref.env"]), environ=environ)
    assert environ.data["REF"] == "true-ref"


def test_load_stops_at_unset_export(testdata, environ):
    (testdata / "bad.env").write_text("GOOD=1\nexport MISSING\n")
    with pytest.raises(UnsetExportError) as exc_info:
        load(LoadOptions(files=["bad.env", ".env"]), environ=environ)
    assert exc_info.value.values == {"GOOD": "1"}
    assert environ.data == {}


def test_load_substitution_precedence(testdata):
    (testdata / "sub.env").write_text("FOO=development\nBAR=$FOO\n")
    environ = MappingEnviron({"FOO": "test"})
    load(LoadOptions(files=["sub.env"]), environ=environ)
    assert environ.data == {"FOO": "test", "BAR": "test"}

    environ = MappingEnviron({"FOO": "test"})
    load(LoadOptions(files=["sub.env"], overload=True), environ=environ)
    assert environ.data == {"FOO": "development", "BAR": "development"}


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------

def test_parse_defaults_to_dotenv(testdata, environ):
    assert parse(environ=environ) == {"DOTENV": "true"}


def test_parse_empty_file_list(testdata, environ):
    assert parse(ParseOptions(files=[]), environ=environ) == {}


def test_parse_missing_file_is_skipped(testdata, environ):
    assert parse(ParseOptions(files=[".env.does_not_exist"]), environ=environ) == {}


def test_parse_multiple_files(testdata, environ):
    result = parse(ParseOptions(files=[".env", "plain.env"]), environ=environ)
    assert result == {"DOTENV": "true", **PLAIN_VALUES}
    assert environ.data == {}


def test_parse_missing_required_file_raises(testdata, environ):
    options = ParseOptions(files=[".env", ".env.does_not_exist"], all_files_required=True)
    with pytest.raises(SourceNotFoundError):
        parse(options, environ=environ)


def test_parse_multiple_paths(testdata, environ):
    result = parse(ParseOptions(paths=[".", "nested"]), environ=environ)
    assert result == {"DOTENV": "true", "NESTED": "true"}


def test_parse_environment_development(testdata, environ):
    result = parse(ParseOptions(files=environment_files("development")), environ=environ)
    assert result == {
        "DOTENV": "development-local",
        "DOTENVDEVELOPMENT": "true",
        "DOTENVDEVELOPMENTLOCAL": "true",
        "DOTENVLOCAL": "true",
    }


def test_parse_environment_test(testdata, environ):
    result = parse(ParseOptions(files=environment_files("test")), environ=environ)
    assert result == {"DOTENV": "test", "DOTENVTEST": "true"}


def test_parse_first_source_wins(testdata, environ):
    (testdata / "a.env").write_text("K=from-a\n")
    (testdata / "b.env").write_text("K=from-b\nONLY_B=b\n")
    result = parse(ParseOptions(files=["a.env", "b.env"]), environ=environ)
    assert result == {"K": "from-a", "ONLY_B": "b"}


def test_parse_keeps_environ_value(testdata):
    environ = MappingEnviron({"DOTENV": "false"})
    assert parse(ParseOptions(files=[".env"]), environ=environ) == {"DOTENV": "false"}
    assert environ.data == {"DOTENV": "false"}


def test_parse_later_source_sees_earlier_values(testdata, environ):
    (testdata / "ref.env").write_text("REF=${DOTENV}-ref\n")
    result = parse(ParseOptions(files=[".env", "ref.env"]), environ=environ)
    assert result["REF"] == "true-ref"


def test_parse_options_cannot_overload():
    with pytest.raises(TypeError):
        ParseOptions(overload=True)  # type: ignore[call-arg]
    with pytest.raises(TypeError):
        ParseOptions(required_keys=["A"])  # type: ignore[call-arg]


def test_compose_values_first_wins_and_environ_kept():
    result = compose_values({"K": "a"}, {"K": "b", "E": "file", "N": "new"}, {"E": "env"})
    assert result == {"K": "a", "E": "env", "N": "new"}


def test_apply_values_keeps_existing_keys():
    env = MappingEnviron({"A": "old"})
    assert apply_values({"A": "new", "B": "2"}, env) == 1
    assert env.data == {"A": "old", "B": "2"}


def test_apply_values_overload_replaces_existing_keys():
    env = MappingEnviron({"A": "old"})
    assert apply_values({"A": "new"}, env, overload=True) == 1
    assert env.data == {"A": "new"}


def test_load_undecodable_source_raises(testdata, environ):
    (testdata / "latin1.env").write_bytes(b"GOOD=1\nBAD=caf\xe9\n")
    with pytest.raises(SourceReadError) as exc_info:
        load(LoadOptions(files=["latin1.env"]), environ=environ)
    assert exc_info.value.path.endswith("latin1.env")
    assert isinstance(exc_info.value.reason, UnicodeDecodeError)
    assert environ.data == {}


def test_parse_undecodable_source_raises(testdata, environ):
    (testdata / "latin1.env").write_bytes(b"BAD=caf\xe9\n")
    with pytest.raises(SourceReadError, match="could not read environment variables file"):
        parse(ParseOptions(files=[".env", "latin1.env"]), environ=environ)


def test_parse_does_not_touch_os_environ(testdata, monkeypatch):
    monkeypatch.delenv("PLAIN", raising=False)
    parse(ParseOptions(files=["plain.env"]))
    assert "PLAIN" not in os.environ


# ---------------------------------------------------------------------------
# python-dotenv style wrappers
# ---------------------------------------------------------------------------

def test_load_dotenv_sets_os_environ(testdata, restore_environ):
    os.environ.pop("DOTENV", None)
    assert load_dotenv() is True
    assert os.environ["DOTENV"] == "true"


def test_load_dotenv_override_false(testdata, restore_environ):
    os.environ["DOTENV"] = "already_set"
    assert load_dotenv() is False
    assert os.environ["DOTENV"] == "already_set"


def test_load_dotenv_override_true(testdata, restore_environ):
    os.environ["DOTENV"] = "old_value"
    assert load_dotenv(override=True) is True
    assert os.environ["DOTENV"] == "true"


def test_load_dotenv_files_and_paths(testdata, restore_environ):
    for key in ("NESTED", "PLAIN"):
        os.environ.pop(key, None)
    load_dotenv(".env", "plain.env", paths=["nested", "."])
    assert os.environ["NESTED"] == "true"
    assert os.environ["PLAIN"] == "true"


def test_load_dotenv_required_keys(testdata, restore_environ):
    os.environ.pop("DOTENVKIT_NOT_THERE", None)
    with pytest.raises(MissingKeysError):
        load_dotenv(required_keys=["DOTENVKIT_NOT_THERE"])


def test_dotenv_values_returns_dict(testdata, monkeypatch):
    monkeypatch.delenv("PLAIN", raising=False)
    monkeypatch.delenv("OPTION_A", raising=False)
    data = dotenv_values("plain.env")
    assert data["PLAIN"] == "true"
    assert data["OPTION_A"] == "1"
    assert "PLAIN" not in os.environ


def test_dotenv_values_missing_required_file(testdata):
    with pytest.raises(SourceNotFoundError):
        dotenv_values("nope.env", all_files_required=True)


# ---------------------------------------------------------------------------
# autoload
# ---------------------------------------------------------------------------

def test_autoload_loads_on_import(testdata, restore_environ):
    os.environ.pop("DOTENV", None)
    sys.modules.pop("dotenvkit.autoload", None)
    try:
        importlib.import_module("dotenvkit.autoload")
    finally:
        sys.modules.pop("dotenvkit.autoload", None)
    assert os.environ["DOTENV"] == "true"


def test_autoload_exits_on_error(testdata, restore_environ, capsys):
    (testdata / ".env").write_text("export NEVER_ASSIGNED\n")
    sys.modules.pop("dotenvkit.autoload", None)
    try:
        with pytest.raises(SystemExit) as exc_info:
            importlib.import_module("dotenvkit.autoload")
    finally:
        sys.modules.pop("dotenvkit.autoload", None)
    assert exc_info.value.code == 1
    assert "dotenv failed to autoload" in capsys.readouterr().err


def test_autoload_exits_on_undecodable_file(testdata, restore_environ, capsys):
    (testdata / ".env").write_bytes(b"BAD=caf\xe9\n")
    sys.modules.pop("dotenvkit.autoload", None)
    try:
        with pytest.raises(SystemExit) as exc_info:
            importlib.import_module("dotenvkit.autoload")
    finally:
        sys.modules.pop("dotenvkit.autoload", None)
    assert exc_info.value.code == 1
    assert "could not read environment variables file" in capsys.readouterr().err
