"""Git branch enumeration through the ``git`` CLI.

Branch names and tips come from one ``for-each-ref`` call. Commit subjects
and timestamps are then looked up in batches on a bounded worker pool; all
batches are joined and merged before ``branches()`` returns, so callers only
ever see one complete list.
"""

from __future__ import annotations

import logging
import subprocess
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from ..items import BranchRecord

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 5.0
COMMIT_LOOKUP_MAX_WORKERS = 8
COMMIT_LOOKUP_BATCH_SIZE = 32
SHORT_HASH_LENGTH = 7

LOCAL_PREFIX = "refs/heads/"
REMOTE_PREFIX = "refs/remotes/"


@dataclass(frozen=True)
class CommitDetails:
    timestamp: int
    subject: str


def _run_git(repo: Path, args: list[str]) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(repo), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed: %s", " ".join(args), exc)
        return None


def parse_commit_details(output: str) -> dict[str, CommitDetails]:
    """Parse ``git show -s --format=%H%x00%ct%x00%s`` output keyed by full hash."""
    details: dict[str, CommitDetails] = {}
    for line in output.splitlines():
        parts = line.split("\x00", 2)
        if len(parts) != 3:
            continue
        full_hash, raw_ts, subject = parts
        try:
            timestamp = int(raw_ts)
        except ValueError:
            timestamp = 0
        details[full_hash] = CommitDetails(timestamp=timestamp, subject=subject)
    return details


def parse_branch_refs(output: str) -> list[tuple[str, bool, str]]:
    """Parse ``for-each-ref`` output into ``(name, is_remote, full_hash)`` tuples.

    Local branches come first, then remote ones, each sorted by name.
    Symbolic ``HEAD`` refs are skipped.
    """
    local: list[tuple[str, bool, str]] = []
    remote: list[tuple[str, bool, str]] = []
    for line in output.splitlines():
        ref_name, sep, full_hash = line.partition("\x00")
        if not sep or "HEAD" in ref_name:
            continue
        if ref_name.startswith(LOCAL_PREFIX):
            local.append((ref_name[len(LOCAL_PREFIX):], False, full_hash.strip()))
        elif ref_name.startswith(REMOTE_PREFIX):
            remote.append((ref_name[len(REMOTE_PREFIX):], True, full_hash.strip()))
    local.sort(key=lambda entry: entry[0])
    remote.sort(key=lambda entry: entry[0])
    return local + remote


class GitProvider:
    """Read branches of the repository containing ``path``."""

    def __init__(self, path: Path | None = None, max_workers: int = COMMIT_LOOKUP_MAX_WORKERS) -> None:
        self.path = Path.cwd() if path is None else path
        self.max_workers = max(1, max_workers)

    def is_repo(self) -> bool:
        proc = _run_git(self.path, ["rev-parse", "--is-inside-work-tree"])
        return proc is not None and proc.returncode == 0 and proc.stdout.strip() == "true"

    def current_branch(self) -> str:
        proc = _run_git(self.path, ["branch", "--show-current"])
        if proc is None or proc.returncode != 0:
            return ""
        return proc.stdout.strip()

    def _lookup_batch(self, hashes: list[str]) -> dict[str, CommitDetails]:
        proc = _run_git(self.path, ["show", "-s", "--format=%H%x00%ct%x00%s", *hashes])
        if proc is None or proc.returncode != 0:
            return {}
        return parse_commit_details(proc.stdout)

    def commit_details(self, hashes: list[str]) -> dict[str, CommitDetails]:
        """Look up subjects/timestamps for ``hashes`` on a bounded pool, merged once."""
        unique = list(dict.fromkeys(h for h in hashes if h))
        if not unique:
            return {}
        batches = [
            unique[start:start + COMMIT_LOOKUP_BATCH_SIZE]
            for start in range(0, len(unique), COMMIT_LOOKUP_BATCH_SIZE)
        ]
        results: list[dict[str, CommitDetails]] = [{} for _ in batches]
        workers = min(self.max_workers, len(batches))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fuzzfish-git-commits") as executor:
            futures = [executor.submit(self._lookup_batch, batch) for batch in batches]
            for batch_idx, future in enumerate(futures):
                try:
                    results[batch_idx] = future.result()
                except Exception:
                    logger.exception("commit lookup batch %d failed", batch_idx)
                    results[batch_idx] = {}

        merged: dict[str, CommitDetails] = {}
        for batch_result in results:
            merged.update(batch_result)
        return merged

    def branches(self) -> list[BranchRecord]:
        proc = _run_git(
            self.path,
            ["for-each-ref", "--format=%(refname)%00%(objectname)", LOCAL_PREFIX, REMOTE_PREFIX],
        )
        if proc is None or proc.returncode != 0:
            return []

        current = self.current_branch()
        refs = parse_branch_refs(proc.stdout)
        details = self.commit_details([full_hash for _, _, full_hash in refs])

        branches: list[BranchRecord] = []
        for name, is_remote, full_hash in refs:
            commit = details.get(full_hash)
            branches.append(
                BranchRecord(
                    name=name,
                    is_current=(not is_remote and name == current),
                    is_remote=is_remote,
                    short_hash=full_hash[:SHORT_HASH_LENGTH],
                    last_message=commit.subject if commit is not None else "",
                    commit_timestamp=commit.timestamp if commit is not None else 0,
                )
            )
        logger.debug("collected %d branches in %s", len(branches), self.path)
        return branches
