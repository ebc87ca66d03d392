# tests/50_core/test_merge_configuration.py
"""Tests for merge_configuration(), the recursive dependency walk."""

from pathlib import Path

import pytest

import autogypi.errors as mod_errors
import autogypi.merge as mod_merge
from tests.utils import (
    RecordingResolver,
    install_package,
    make_node_package,
    write_config_file,
)


def test_no_dependencies_yields_own_includes(workspace: Path) -> None:
    # --- setup ---
    config = write_config_file(
        workspace / "autogypi.json",
        includes=["gyp/a.gypi", "b.gypi"],
        topIncludes=["top.gypi"],
    )

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert pair.gypi == {
        "includes": [str(workspace / "gyp" / "a.gypi"), str(workspace / "b.gypi")]
    }
    assert pair.gypi_top == {"includes": [str(workspace / "top.gypi")]}


def test_plain_package_contributes_one_include_dir(workspace: Path) -> None:
    # --- setup ---
    nan = install_package(workspace, "nan", files=["nan.h"])
    config = write_config_file(workspace / "autogypi.json", dependencies=["nan"])

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert pair.gypi == {"include_dirs": [str(nan)]}
    assert pair.gypi_top == {}


def test_configured_package_recurses_deps_then_own_includes(workspace: Path) -> None:
    # --- setup ---
    nan = install_package(workspace, "nan")
    nbind = install_package(
        workspace,
        "nbind",
        autogypi={
            "dependencies": ["nan"],
            "includes": ["src/nbind.gypi"],
            "topIncludes": ["src/nbind-common.gypi"],
        },
    )
    config = write_config_file(
        workspace / "autogypi.json",
        dependencies=["nbind"],
        includes=["local.gypi"],
    )

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert pair.gypi == {
        "include_dirs": [str(nan)],
        "includes": [
            str(nbind / "src" / "nbind.gypi"),
            str(workspace / "local.gypi"),
        ],
    }
    assert pair.gypi_top == {"includes": [str(nbind / "src" / "nbind-common.gypi")]}


def test_own_include_dirs_follow_dependencies(workspace: Path) -> None:
    # --- setup ---
    nan = install_package(workspace, "nan")
    config = write_config_file(
        workspace / "autogypi.json",
        dependencies=["nan"],
        includeDirs=["include"],
    )

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert pair.gypi == {"include_dirs": [str(nan), str(workspace / "include")]}


def test_dependency_order_is_preserved(workspace: Path) -> None:
    # --- setup ---
    names = ["zeta", "alpha", "mid"]
    dirs = [install_package(workspace, name) for name in names]
    config = write_config_file(workspace / "autogypi.json", dependencies=names)

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert pair.gypi["include_dirs"] == [str(d) for d in dirs]


def test_same_name_twice_contributes_once(workspace: Path) -> None:
    # --- setup ---
    nan = install_package(workspace, "nan")
    config = write_config_file(
        workspace / "autogypi.json", dependencies=["nan", "nan"]
    )

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert pair.gypi == {"include_dirs": [str(nan)]}


def test_shared_dependency_first_occurrence_wins(workspace: Path) -> None:
    """A package required by two dependencies is included once, at its first use."""
    # --- setup ---
    nan = install_package(workspace, "nan")
    first = install_package(
        workspace, "first", autogypi={"dependencies": ["nan"], "includes": ["f.gypi"]}
    )
    second = install_package(
        workspace, "second", autogypi={"dependencies": ["nan"], "includes": ["s.gypi"]}
    )
    config = write_config_file(
        workspace / "autogypi.json", dependencies=["first", "second"]
    )

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert pair.gypi == {
        "include_dirs": [str(nan)],
        "includes": [str(first / "f.gypi"), str(second / "s.gypi")],
    }


@pytest.mark.parametrize(
    "dependencies",
    [["foo", "./vendor/foo"], ["./vendor/foo", "foo"]],
)
def test_different_references_to_same_root_contribute_once(
    workspace: Path, dependencies: list[str]
) -> None:
    # --- setup ---
    foo = make_node_package(workspace / "vendor" / "foo", files=["index.js"])
    resolver = RecordingResolver({"foo": foo / "index.js"})
    config = write_config_file(workspace / "autogypi.json", dependencies=dependencies)

    # --- execute ---
    pair = mod_merge.merge_configuration(config, resolver)

    # --- verify ---
    assert pair.gypi == {"include_dirs": [str(foo)]}


def test_path_references_never_reach_resolver(workspace: Path) -> None:
    # --- setup ---
    make_node_package(workspace / "vendor" / "lib")
    nan = install_package(workspace, "nan")
    resolver = RecordingResolver({"nan": nan / "package.json"})
    config = write_config_file(
        workspace / "autogypi.json",
        dependencies=["./vendor/lib", "nan"],
    )

    # --- execute ---
    mod_merge.merge_configuration(config, resolver)

    # --- verify ---
    assert resolver.requested == ["nan"]
    assert resolver.calls == [(["nan"], workspace)]


def test_name_references_resolved_in_one_batch(workspace: Path) -> None:
    # --- setup ---
    entries = {name: install_package(workspace, name) for name in ("a", "b", "@s/c")}
    resolver = RecordingResolver({k: v / "package.json" for k, v in entries.items()})
    config = write_config_file(
        workspace / "autogypi.json", dependencies=["a", "./a-local", "b", "@s/c"]
    )
    make_node_package(workspace / "a-local")

    # --- execute ---
    mod_merge.merge_configuration(config, resolver)

    # --- verify ---
    assert resolver.calls == [(["a", "b", "@s/c"], workspace)]


def test_child_borrows_resolver_without_override(workspace: Path) -> None:
    # --- setup ---
    inner = make_node_package(workspace / "store" / "inner")
    outer = make_node_package(
        workspace / "store" / "outer", autogypi={"dependencies": ["inner"]}
    )
    resolver = RecordingResolver(
        {"outer": outer / "package.json", "inner": inner / "package.json"}
    )
    config = write_config_file(workspace / "autogypi.json", dependencies=["outer"])

    # --- execute ---
    pair = mod_merge.merge_configuration(config, resolver)

    # --- verify ---
    assert pair.gypi == {"include_dirs": [str(inner)]}
    # second batch resolved from the child's own directory
    assert resolver.calls[1] == (["inner"], outer)


def test_child_resolver_override_takes_precedence(workspace: Path) -> None:
    # --- setup ---
    special = make_node_package(workspace / "special")
    outer = install_package(
        workspace,
        "outer",
        autogypi={"dependencies": ["anything"]},
        resolver_source=(
            "def resolve(names, basedir):\n"
            f"    return [{str(special / 'package.json')!r} for _ in names]\n"
        ),
    )
    config = write_config_file(workspace / "autogypi.json", dependencies=["outer"])

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert outer.exists()
    assert pair.gypi == {"include_dirs": [str(special)]}


def test_dependency_cycle_does_not_reinclude(workspace: Path) -> None:
    # --- setup ---
    a = install_package(
        workspace, "a", autogypi={"dependencies": ["b"], "includes": ["a.gypi"]}
    )
    b = install_package(
        workspace, "b", autogypi={"dependencies": ["a"], "includes": ["b.gypi"]}
    )
    config = write_config_file(workspace / "autogypi.json", dependencies=["a"])

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert pair.gypi == {"includes": [str(b / "b.gypi"), str(a / "a.gypi")]}


def test_missing_named_dependency_is_fatal(workspace: Path) -> None:
    # --- setup ---
    config = write_config_file(workspace / "autogypi.json", dependencies=["ghost"])

    # --- execute and verify ---
    with pytest.raises(mod_errors.ResolutionError) as exc_info:
        mod_merge.merge_configuration(config)
    assert exc_info.value.dependency == "ghost"
    assert exc_info.value.config_path == config.resolve()
    assert "autogypi.json" in str(exc_info.value)


def test_failing_resolver_override_names_configuration(workspace: Path) -> None:
    # --- setup ---
    make_node_package(
        workspace,
        resolver_source=(
            "def resolve(names, basedir):\n"
            "    raise LookupError('no such package')\n"
        ),
    )
    config = write_config_file(workspace / "autogypi.json", dependencies=["outer"])

    # --- execute and verify ---
    with pytest.raises(mod_errors.ResolutionError) as exc_info:
        mod_merge.merge_configuration(config)
    assert exc_info.value.dependency == "outer"
    assert exc_info.value.config_path == config.resolve()
    assert "no such package" in str(exc_info.value)


def test_missing_path_dependency_is_fatal(workspace: Path) -> None:
    # --- setup ---
    config = write_config_file(
        workspace / "autogypi.json", dependencies=["./vendor/ghost"]
    )
    make_node_package(workspace)  # would otherwise be found walking up

    # --- execute and verify ---
    with pytest.raises(mod_errors.ResolutionError, match="ghost"):
        mod_merge.merge_configuration(config)


def test_dependency_without_markers_is_fatal(workspace: Path) -> None:
    """Decision point: a dependency with neither marker aborts the run."""
    # --- setup ---
    broken = workspace / "node_modules" / "broken"
    (broken / "lib").mkdir(parents=True)
    resolver = RecordingResolver({"broken": broken / "lib" / "index.js"})
    config = write_config_file(workspace / "autogypi.json", dependencies=["broken"])

    # --- execute and verify ---
    with pytest.raises(mod_errors.PackageRootNotFoundError) as exc_info:
        mod_merge.merge_configuration(config, resolver)
    assert exc_info.value.dependency == "broken"
    assert "broken" in str(exc_info.value)
    assert str(config.resolve()) in str(exc_info.value)


def test_path_dependency_without_markers_is_fatal(workspace: Path) -> None:
    """An unmarked directory must not fall back to the declaring package."""
    # --- setup ---
    (workspace / "vendor" / "broken").mkdir(parents=True)
    config = write_config_file(
        workspace / "autogypi.json",
        dependencies=["./vendor/broken"],
        includes=["own.gypi"],
    )

    # --- execute and verify ---
    with pytest.raises(mod_errors.PackageRootNotFoundError) as exc_info:
        mod_merge.merge_configuration(config)
    assert exc_info.value.dependency == "./vendor/broken"
    assert exc_info.value.config_path == config.resolve()


def test_self_reference_is_skipped(workspace: Path) -> None:
    # --- setup ---
    make_node_package(workspace)
    config = write_config_file(
        workspace / "autogypi.json", dependencies=["."], includes=["own.gypi"]
    )

    # --- execute ---
    pair = mod_merge.merge_configuration(config)

    # --- verify ---
    assert pair.gypi == {"includes": [str(workspace / "own.gypi")]}


def test_malformed_dependency_config_is_fatal(workspace: Path) -> None:
    # --- setup ---
    bad = install_package(workspace, "bad")
    (bad / "autogypi.json").write_text("{not json", encoding="utf-8")
    config = write_config_file(workspace / "autogypi.json", dependencies=["bad"])

    # --- execute and verify ---
    with pytest.raises(mod_errors.ConfigReadError) as exc_info:
        mod_merge.merge_configuration(config)
    assert exc_info.value.config_path == bad / "autogypi.json"


def test_context_is_shared_across_calls(workspace: Path) -> None:
    # --- setup ---
    install_package(workspace, "nan")
    config = write_config_file(workspace / "autogypi.json", dependencies=["nan"])
    context = mod_merge.MergeContext()

    # --- execute ---
    first = mod_merge.merge_configuration(config, context=context)
    second = mod_merge.merge_configuration(config, context=context)

    # --- verify ---
    assert first.gypi
    assert second.gypi == {}
    assert "nan" in context.names


def test_visited_set_claim_is_write_once() -> None:
    # --- setup ---
    visited = mod_merge.VisitedSet()

    # --- execute and verify ---
    assert visited.claim("nan") is True
    assert visited.claim("nan") is False
    assert "nan" in visited
    assert len(visited) == 1


def test_found_modules_are_logged(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    # --- setup ---
    install_package(workspace, "nan")
    config = write_config_file(workspace / "autogypi.json", dependencies=["nan"])

    # --- execute ---
    mod_merge.merge_configuration(config)

    # --- verify ---
    out = capsys.readouterr().out
    assert "Found module nan in" in out
