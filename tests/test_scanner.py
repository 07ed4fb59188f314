"""Tests for lockfile discovery and the scan loop."""

import json

import pytest

from lock_guard.core.aggregator import EXIT_COMPROMISED, EXIT_INCOMPLETE, EXIT_WARNINGS
from lock_guard.core.matcher import MatchKind
from lock_guard.core.scanner import LockfileScanner
from lock_guard.core.watchlist import parse_watchlist
from lock_guard.errors import UsageError
from lock_guard.utils.path_utils import find_lockfiles


@pytest.fixture
def watchlist():
    return parse_watchlist(["debug@4.4.2", "chalk@5.6.1", "foo@2.0.0"])


@pytest.fixture
def project_tree(tmp_path):
    """Create a monorepo with one lockfile per dialect."""
    (tmp_path / "web").mkdir()
    (tmp_path / "web" / "package-lock.json").write_text(json.dumps({
        "lockfileVersion": 3,
        "packages": {"node_modules/debug": {"version": "4.4.2"}},
    }))
    (tmp_path / "api").mkdir()
    (tmp_path / "api" / "yarn.lock").write_text('chalk@^5.0.0:\n  version "5.3.0"\n')
    (tmp_path / "tools").mkdir()
    (tmp_path / "tools" / "pnpm-lock.yaml").write_text("packages:\n  /left-pad@1.3.0:\n    dev: true\n")
    (tmp_path / "web" / "node_modules" / "x").mkdir(parents=True)
    (tmp_path / "web" / "node_modules" / "x" / "package-lock.json").write_text("{}")
    return tmp_path


class TestFindLockfiles:
    """Test lockfile discovery."""

    def test_finds_every_dialect(self, project_tree):
        refs = find_lockfiles(project_tree)
        found = {(ref.path.relative_to(project_tree).as_posix(), ref.dialect) for ref in refs}

        assert found == {
            ("web/package-lock.json", "npm"),
            ("api/yarn.lock", "yarn"),
            ("tools/pnpm-lock.yaml", "pnpm"),
        }

    def test_sorted_by_path(self, project_tree):
        refs = find_lockfiles(project_tree)
        paths = [ref.path.as_posix() for ref in refs]
        assert paths == sorted(paths)

    def test_skips_node_modules(self, project_tree):
        refs = find_lockfiles(project_tree)
        assert all("node_modules" not in ref.path.parts for ref in refs)

    def test_ignore_patterns(self, project_tree):
        refs = find_lockfiles(project_tree, ignore_patterns=["*/tools/*"])
        assert {ref.dialect for ref in refs} == {"npm", "yarn"}

    def test_ignore_by_file_name(self, project_tree):
        refs = find_lockfiles(project_tree, ignore_patterns=["yarn.lock"])
        assert "yarn" not in {ref.dialect for ref in refs}

    def test_single_file_root(self, project_tree):
        refs = find_lockfiles(project_tree / "api" / "yarn.lock")
        assert [ref.dialect for ref in refs] == ["yarn"]

    def test_missing_root(self, tmp_path):
        with pytest.raises(UsageError):
            find_lockfiles(tmp_path / "nope")


class TestLockfileScanner:
    """Test scanning lockfiles end to end."""

    def test_npm_flat_exact_match(self, tmp_path, watchlist):
        """A compromised flat entry flags the lockfile's directory."""
        lock_file = tmp_path / "package-lock.json"
        lock_file.write_text(json.dumps({"packages": {"node_modules/debug": {"version": "4.4.2"}}}))

        state = LockfileScanner(watchlist).scan([lock_file])

        assert state.found_any
        assert state.affected_dirs == {tmp_path.resolve()}
        assert state.exit_code == EXIT_COMPROMISED

    def test_absent_package_not_flagged(self, tmp_path, watchlist):
        lock_file = tmp_path / "yarn.lock"
        lock_file.write_text('left-pad@^1.3.0:\n  version "1.3.0"\n')

        outcome = LockfileScanner(watchlist).scan_file(lock_file)

        assert not outcome.flagged
        assert outcome.hits == []
        assert all(result.kind is MatchKind.ABSENT for result in outcome.results)

    def test_unparseable_lockfile_is_isolated(self, project_tree, watchlist):
        """A broken npm lockfile fails alone; other files still count."""
        broken = project_tree / "broken"
        broken.mkdir()
        (broken / "package-lock.json").write_text('{"packages": ')

        paths = [ref.path for ref in find_lockfiles(project_tree)]
        state = LockfileScanner(watchlist).scan(paths)

        assert state.failed_files == [broken / "package-lock.json"]
        assert state.found_any
        assert state.warn_any
        assert broken.resolve() not in state.affected_dirs
        assert state.exit_code == EXIT_COMPROMISED

    def test_only_unparseable_lockfile(self, tmp_path, watchlist):
        lock_file = tmp_path / "package-lock.json"
        lock_file.write_text("<<<<<<< HEAD")

        state = LockfileScanner(watchlist).scan([lock_file])

        assert state.exit_code == EXIT_INCOMPLETE
        assert "Could not parse" in state.outcomes[0].error

    def test_deeply_nested_lockfile_fails_alone(self, tmp_path, watchlist):
        depth = 100000
        lock_file = tmp_path / "package-lock.json"
        lock_file.write_text('{"dependencies": ' + '{"a": {"dependencies": ' * depth + "{}" + "}}" * depth + "}")

        outcome = LockfileScanner(watchlist).scan_file(lock_file)

        assert outcome.failed
        assert "nested too deeply" in outcome.error

    def test_unknown_lockfile_name(self, tmp_path, watchlist):
        other = tmp_path / "Cargo.lock"
        other.write_text("")

        outcome = LockfileScanner(watchlist).scan_file(other)

        assert outcome.failed
        assert outcome.dialect == "unknown"

    def test_warning_only_tree(self, tmp_path, watchlist):
        lock_file = tmp_path / "yarn.lock"
        lock_file.write_text('chalk@^5.0.0:\n  version "5.3.0"\n')

        state = LockfileScanner(watchlist).scan([lock_file])

        assert state.exit_code == EXIT_WARNINGS
        assert [hit.found_display for hit in state.outcomes[0].hits] == ["5.3.0"]

    def test_callback_receives_outcomes_in_order(self, project_tree, watchlist):
        paths = [ref.path for ref in find_lockfiles(project_tree)]
        seen = []

        LockfileScanner(watchlist).scan(paths, on_outcome=lambda outcome: seen.append(outcome.path))

        assert seen == paths

    def test_parallel_scan_matches_sequential(self, project_tree, watchlist):
        paths = [ref.path for ref in find_lockfiles(project_tree)]
        scanner = LockfileScanner(watchlist)

        sequential = scanner.scan(paths)
        parallel = scanner.scan(paths, jobs=4)

        assert parallel.found_any == sequential.found_any
        assert parallel.warn_any == sequential.warn_any
        assert parallel.affected_dirs == sequential.affected_dirs
        assert [o.path for o in parallel.outcomes] == [o.path for o in sequential.outcomes]
