# tests/test_resolution.py
"""Tests for resolving include patterns into search paths."""

import os
import pytest
from pathlib import Path

from searchscope.config.settings import SearchOptions
from searchscope.core.resolution import (
    PatternPathMap,
    resolve_include_folder_from_glob,
    resolve_pattern_to_paths_map,
    resolve_search_paths_from_includes,
    resolve_search_scope,
    strip_glob_suffix,
)
from searchscope.core.resolution import glob_paths
from searchscope.exceptions import PathResolutionError


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Creates a workspace root with a few folders and files."""
    root = tmp_path / "root"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "src" / "main.ts").write_text("console.log('hi');")
    (root / "README.md").write_text("# readme")
    return root

@pytest.fixture
def two_roots(tmp_path: Path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    for root in (first, second):
        (root / "shared").mkdir(parents=True)
    (first / "only_first").mkdir()
    return str(first), str(second)


class TestStripGlobSuffix:

    @pytest.mark.parametrize("pattern, expected", [
        ("/a/b/c/**", "/a/b/c"),
        ("./foo/**", "./foo"),
        ("./foo/**/", "./foo"),
        ("foo/**", "foo"),
        ("**", ""),
        ("/**", "/"),
        ("./foo", "./foo"),
        ("./foo/*", "./foo/*"),
        ("./foo/**/*.ts", "./foo/**/*.ts"),
        ("*.ts", "*.ts"),
        ("./foo/a**", "./foo/a**"),
    ])
    def test_strip(self, pattern, expected):
        assert strip_glob_suffix(pattern) == expected


class TestResolveIncludeFolderFromGlob:

    def test_relative_folder_pattern(self, workspace: Path):
        assert resolve_include_folder_from_glob(str(workspace), "./src/**") == str(workspace / "src")

    def test_relative_file_without_suffix(self, workspace: Path):
        assert resolve_include_folder_from_glob(str(workspace), "./README.md") == str(workspace / "README.md")

    def test_relative_path_is_normalized(self, workspace: Path):
        found = resolve_include_folder_from_glob(str(workspace), "./src/pkg/../**")
        assert found == str(workspace / "src")

    def test_absolute_pattern_ignores_root(self, workspace: Path, tmp_path: Path):
        pattern = str(workspace / "docs") + "/**"
        assert resolve_include_folder_from_glob(str(tmp_path), pattern) == str(workspace / "docs")

    def test_true_glob_is_not_reducible(self, workspace: Path):
        assert resolve_include_folder_from_glob(str(workspace), "*.ts") is None
        assert resolve_include_folder_from_glob(str(workspace), "src/**") is None
        assert resolve_include_folder_from_glob(str(workspace), "**") is None

    def test_missing_path_is_no_match(self, workspace: Path):
        assert resolve_include_folder_from_glob(str(workspace), "./nope/**") is None
        assert resolve_include_folder_from_glob(str(workspace), str(workspace / "nope") + "/**") is None

    def test_wildcards_left_in_base_do_not_match(self, workspace: Path):
        assert resolve_include_folder_from_glob(str(workspace), "./src/*") is None

    def test_path_through_a_file_is_no_match(self, workspace: Path):
        assert resolve_include_folder_from_glob(str(workspace), "./README.md/inner/**") is None

    def test_embedded_nul_byte_is_raised(self, workspace: Path):
        with pytest.raises(PathResolutionError):
            resolve_include_folder_from_glob(str(workspace), "./sr\0c/**")

    def test_permission_denied_is_raised_with_cause(self, workspace: Path, monkeypatch):
        def denied_stat(path, *args, **kwargs):
            raise PermissionError(13, "Permission denied", path)

        monkeypatch.setattr(glob_paths.os, "stat", denied_stat)
        with pytest.raises(PathResolutionError) as exc_info:
            resolve_include_folder_from_glob(str(workspace), "./src/**")
        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestPatternPathMap:

    def test_append_unique_keeps_order_and_dedups_per_pattern(self):
        pattern_map = PatternPathMap()
        pattern_map.append_unique("b", "/1")
        pattern_map.append_unique("a", "/2")
        pattern_map.append_unique("b", "/1")
        pattern_map.append_unique("b", "/3")
        pattern_map.append_unique("a", "/1")

        assert pattern_map.patterns() == ["b", "a"]
        assert pattern_map.paths_for("b") == ["/1", "/3"]
        assert pattern_map.flattened_paths() == ["/1", "/3", "/2", "/1"]
        assert len(pattern_map) == 2
        assert "a" in pattern_map and "c" not in pattern_map

    def test_paths_for_returns_copy(self):
        pattern_map = PatternPathMap()
        pattern_map.append_unique("a", "/1")
        pattern_map.paths_for("a").append("/2")
        assert pattern_map.to_dict() == {"a": ["/1"]}

    def test_empty_map(self):
        pattern_map = PatternPathMap()
        assert len(pattern_map) == 0
        assert pattern_map.flattened_paths() == []
        assert pattern_map.paths_for("missing") == []


class TestResolvePatternToPathsMap:

    def test_only_resolvable_patterns_are_present(self, workspace: Path):
        result = resolve_pattern_to_paths_map(["*.ts", "./src/**", "./nope/**"], [str(workspace)])
        assert result.to_dict() == {"./src/**": [str(workspace / "src")]}

    def test_same_subfolder_under_two_roots(self, two_roots):
        first, second = two_roots
        result = resolve_pattern_to_paths_map(["./shared/**"], [first, second])
        assert result.paths_for("./shared/**") == [os.path.join(first, "shared"), os.path.join(second, "shared")]

    def test_absolute_pattern_found_once_across_roots(self, two_roots):
        first, second = two_roots
        pattern = os.path.join(first, "shared") + "/**"
        result = resolve_pattern_to_paths_map([pattern], [first, second])
        assert result.paths_for(pattern) == [os.path.join(first, "shared")]

    def test_patterns_keep_input_order(self, two_roots):
        first, second = two_roots
        result = resolve_pattern_to_paths_map(["./only_first/**", "./shared/**"], [second, first])
        assert result.patterns() == ["./only_first/**", "./shared/**"]


class TestResolveSearchPathsFromIncludes:

    def test_no_options_returns_roots_unchanged(self, workspace: Path):
        roots = [str(workspace)]
        assert resolve_search_paths_from_includes(roots, None) is roots

    def test_no_include_returns_roots_and_leaves_options(self, workspace: Path):
        roots = [str(workspace)]
        opts = SearchOptions()
        assert resolve_search_paths_from_includes(roots, opts) is roots
        assert opts.include is None

        opts = SearchOptions(include=[])
        assert resolve_search_paths_from_includes(roots, opts) is roots
        assert opts.include == []

    def test_reducible_pattern_replaces_roots(self, workspace: Path):
        opts = SearchOptions(include=["./src/**"])
        assert resolve_search_paths_from_includes([str(workspace)], opts) == [str(workspace / "src")]
        assert opts.include == []

    def test_true_glob_falls_back_to_roots(self, workspace: Path):
        opts = SearchOptions(include=["*.ts"])
        assert resolve_search_paths_from_includes([str(workspace)], opts) == [str(workspace)]
        assert opts.include == ["*.ts"]

    def test_unresolved_includes_return_the_roots_list_itself(self, workspace: Path):
        roots = [str(workspace)]
        opts = SearchOptions(include=["*.ts", "./missing/**"])
        assert resolve_search_paths_from_includes(roots, opts) is roots
        assert opts.include == ["*.ts", "./missing/**"]

    def test_missing_absolute_path_falls_back_to_roots(self, workspace: Path, tmp_path: Path):
        missing = str(tmp_path / "abs" / "path") + "/**"
        opts = SearchOptions(include=[missing])
        assert resolve_search_paths_from_includes([str(workspace)], opts) == [str(workspace)]
        assert opts.include == [missing]

    def test_mixed_patterns_only_remove_resolved_ones(self, workspace: Path):
        opts = SearchOptions(include=["*.md", "./docs/**", "./src/**", "./gone/**"])
        result = resolve_search_paths_from_includes([str(workspace)], opts)
        assert result == [str(workspace / "docs"), str(workspace / "src")]
        assert opts.include == ["*.md", "./gone/**"]

    def test_two_roots_with_shared_subfolder(self, two_roots):
        first, second = two_roots
        opts = SearchOptions(include=["./shared/**"])
        result = resolve_search_paths_from_includes([first, second], opts)
        assert result == [os.path.join(first, "shared"), os.path.join(second, "shared")]
        assert opts.include == []

    def test_no_dedup_across_patterns(self, workspace: Path):
        opts = SearchOptions(include=["./src/**", "./src"])
        result = resolve_search_paths_from_includes([str(workspace)], opts)
        assert result == [str(workspace / "src"), str(workspace / "src")]


class TestResolveSearchScope:

    def test_inputs_are_not_mutated(self, workspace: Path):
        roots = [str(workspace)]
        include = ["./src/**", "*.ts"]
        scope = resolve_search_scope(roots, include)

        assert include == ["./src/**", "*.ts"]
        assert roots == [str(workspace)]
        assert scope.search_paths == [str(workspace / "src")]
        assert scope.remaining_includes == ["*.ts"]
        assert scope.narrowed

    def test_nothing_resolved(self, workspace: Path):
        roots = [str(workspace)]
        scope = resolve_search_scope(roots, ["*.ts"])
        assert scope.search_paths == roots
        assert scope.search_paths is not roots
        assert scope.remaining_includes == ["*.ts"]
        assert not scope.narrowed
        assert len(scope.resolved) == 0

    def test_none_include(self, workspace: Path):
        scope = resolve_search_scope([str(workspace)], None)
        assert scope.search_paths == [str(workspace)]
        assert scope.remaining_includes is None
