"""Unit tests for exclusion validation and the local exclusion file."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from depparams.core.result import Err, Ok
from depparams.core.types import Dependency, Module
from depparams.params.errors import LocalExcludeFileError
from depparams.params.exclusions import (
    ModuleRequirements,
    combine_module_requirements,
    load_local_excludes,
    parse_exclusion_line,
    parse_local_excludes,
    validate_excludes,
)
from depparams.parsing import StringModuleParser

SCALA = "2.13.12"


def _dep(org, name, version="1.0", **kwargs):
    return Dependency(module=Module(organization=org, name=name), version=version, **kwargs)


# --- Global exclusions ---

class TestValidateExcludes:
    @pytest.fixture
    def parser(self):
        return StringModuleParser()

    def test_deduplicated_pairs(self, parser):
        result = validate_excludes(["a:b", "c:d", "a:b"], SCALA, parser)
        assert result == Ok(frozenset({("a", "b"), ("c", "d")}))

    def test_independent_of_order(self, parser):
        forward = validate_excludes(["a:b", "c:d", "e:f"], SCALA, parser)
        backward = validate_excludes(["e:f", "c:d", "a:b"], SCALA, parser)
        assert forward == backward

    def test_empty(self, parser):
        assert validate_excludes([], SCALA, parser) == Ok(frozenset())

    def test_cross_built_exclusion(self, parser):
        result = validate_excludes(["com.lihaoyi::os-lib"], SCALA, parser)
        assert result == Ok(frozenset({("com.lihaoyi", "os-lib_2.13")}))

    def test_attributes_rejected_and_named(self, parser):
        result = validate_excludes(
            ["a:b", "org:x;scalaVersion=2.12", "org:y;sbtVersion=1.0"], SCALA, parser
        )
        assert isinstance(result, Err)
        assert len(result.error) == 1
        message = result.error[0]
        assert message.startswith("Excluded modules with attributes not supported:")
        assert "  org:x;scalaVersion=2.12" in message
        assert "  org:y;sbtVersion=1.0" in message

    def test_parse_errors_all_listed(self):
        parser = MagicMock()
        parser.modules.return_value = Err(["first error", "second error"])

        result = validate_excludes(["x", "y"], SCALA, parser)

        assert result == Err(["Cannot parse excluded modules:\n  first error\n  second error"])
        parser.modules.assert_called_once_with(["x", "y"], SCALA)


# --- Local exclusion file ---

class TestParseExclusionLine:
    def test_valid(self):
        assert parse_exclusion_line("app--orgA:nameA") == Ok(("app", ("orgA", "nameA")))

    def test_empty_parent_is_allowed(self):
        assert parse_exclusion_line("--org:name") == Ok(("", ("org", "name")))

    @pytest.mark.parametrize(
        "line",
        ["", "app", "app--", "app--org", "a--b--c:d", "app--org:name:extra", "app--org:"],
    )
    def test_malformed(self, line):
        assert parse_exclusion_line(line) == Err([f"Failed to parse {line}"])


class TestParseLocalExcludes:
    def test_grouped_by_parent(self):
        result = parse_local_excludes("app--orgA:nameA\napp--orgB:nameB")
        assert result == Ok({"app": frozenset({("orgA", "nameA"), ("orgB", "nameB")})})

    def test_several_parents(self):
        result = parse_local_excludes("a:x--o:n\nb:y--o:n\na:x--p:m")
        assert result == Ok({
            "a:x": frozenset({("o", "n"), ("p", "m")}),
            "b:y": frozenset({("o", "n")}),
        })

    def test_trailing_newline_ignored(self):
        result = parse_local_excludes("app--org:name\n")
        assert result == Ok({"app": frozenset({("org", "name")})})

    def test_one_bad_line_reports_one_error(self):
        text = "\n".join(["app--o1:n1", "app--o2:n2", "garbage", "app--o3:n3"])
        assert parse_local_excludes(text) == Err(["Failed to parse garbage"])

    def test_every_bad_line_reported(self):
        result = parse_local_excludes("bad1\napp--o:n\nbad2")
        assert result == Err(["Failed to parse bad1", "Failed to parse bad2"])

    def test_blank_line_is_an_error(self):
        result = parse_local_excludes("app--o:n\n\napp--p:m")
        assert result == Err(["Failed to parse "])


class TestLoadLocalExcludes:
    @pytest.mark.parametrize("path", ["", None])
    def test_no_path_reads_nothing(self, path):
        with patch("builtins.open") as mock_open:
            assert load_local_excludes(path) == Ok({})
        mock_open.assert_not_called()

    def test_reads_file(self, tmp_path):
        path = tmp_path / "excludes.txt"
        path.write_text("app--orgA:nameA\napp--orgB:nameB\n")

        result = load_local_excludes(str(path))

        assert result == Ok({"app": frozenset({("orgA", "nameA"), ("orgB", "nameB")})})

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "excludes.txt"
        path.write_text("app--orgA:nameA\nnope\n")

        assert load_local_excludes(path) == Err(["Failed to parse nope"])

    def test_missing_file_is_fatal(self, tmp_path):
        missing = tmp_path / "missing.txt"

        with pytest.raises(LocalExcludeFileError) as exc_info:
            load_local_excludes(str(missing))

        assert exc_info.value.path == str(missing)
        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert "Cannot read local exclusion file" in exc_info.value.messages[0]

    def test_handle_closed_before_parsing(self, tmp_path):
        path = tmp_path / "excludes.txt"
        path.write_text("bad line")
        handles = []
        real_open = open

        def tracking_open(*args, **kwargs):
            handle = real_open(*args, **kwargs)
            handles.append(handle)
            return handle

        with patch("builtins.open", side_effect=tracking_open):
            result = load_local_excludes(str(path))

        assert isinstance(result, Err)
        assert len(handles) == 1
        assert handles[0].closed


# --- Combination ---

class TestModuleRequirements:
    def test_global_excludes_apply_to_all(self):
        req = ModuleRequirements(global_excludes=frozenset({("x", "y")}))
        entries = req([(_dep("a", "b"), {}), (_dep("c", "d"), {"url": "u"})])

        assert all(dep.exclusions == frozenset({("x", "y")}) for dep, _ in entries)
        assert entries[1][1] == {"url": "u"}

    def test_local_excludes_match_org_name(self):
        req = ModuleRequirements(
            global_excludes=frozenset({("g", "g")}),
            local_excludes={"a:b": frozenset({("l", "l")})},
        )
        (matched, _), (other, _) = req([(_dep("a", "b"), {}), (_dep("c", "d"), {})])

        assert matched.exclusions == frozenset({("g", "g"), ("l", "l")})
        assert other.exclusions == frozenset({("g", "g")})

    def test_existing_exclusions_kept(self):
        req = ModuleRequirements(global_excludes=frozenset({("g", "g")}))
        dep = _dep("a", "b", exclusions=frozenset({("own", "own")}))

        ((applied, _),) = req([(dep, {})])

        assert applied.exclusions == frozenset({("g", "g"), ("own", "own")})

    def test_no_exclusions_leaves_entries_unchanged(self):
        dep = _dep("a", "b")
        assert ModuleRequirements()([(dep, {})]) == [(dep, {})]


class TestCombineModuleRequirements:
    def test_success(self):
        result = combine_module_requirements(
            Ok(frozenset({("a", "b")})), Ok({"p": frozenset({("c", "d")})})
        )
        assert result == Ok(ModuleRequirements(
            global_excludes=frozenset({("a", "b")}),
            local_excludes={"p": frozenset({("c", "d")})},
        ))

    def test_both_failures_reported(self):
        result = combine_module_requirements(Err(["exclude error"]), Err(["file error"]))
        assert result == Err(["exclude error", "file error"])

    def test_single_failure(self):
        result = combine_module_requirements(Ok(frozenset()), Err(["file error"]))
        assert result == Err(["file error"])


def test_unreadable_file_not_logged_as_error(tmp_path, caplog):
    with caplog.at_level(logging.DEBUG, logger="depparams.params.exclusions"):
        with pytest.raises(LocalExcludeFileError):
            load_local_excludes(str(tmp_path / "missing.txt"))

    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
