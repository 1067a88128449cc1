"""Scoring of matched history records.

A record's score is the sum of three parts:

* a directory boost when it was run in the caller's working directory;
* a recency boost falling linearly from 1 (just run) to 0 (a month old);
* how much of the command the query text covers.

Higher scores rank first; ties go to the newer record.
"""

from __future__ import annotations

from dataclasses import dataclass

from fuzzy_history.history.records import CommandRecord
from fuzzy_history.matching import coverage

ONE_MONTH_MS = 2_629_800_000


def recency_boost(age_ms: int, period_ms: int = ONE_MONTH_MS) -> float:
    return max(0.0, 1.0 - max(age_ms, 0) / period_ms)


@dataclass
class ScoredRecord:
    record: CommandRecord
    score: float

    def sort_key(self) -> tuple[float, int, int]:
        return (-self.score, -self.record.created_ms, self.record.id or 0)


def score_record(
    record: CommandRecord,
    tokens: list[str],
    cwd: str,
    now: int,
    directory_boost: float = 1.0,
) -> ScoredRecord:
    score = recency_boost(now - record.created_ms)
    if record.directory == cwd:
        score += directory_boost
    score += coverage(record.command, tokens)
    return ScoredRecord(record=record, score=score)


def rank(
    records: list[CommandRecord],
    tokens: list[str],
    cwd: str,
    now: int,
    limit: int,
    directory_boost: float = 1.0,
) -> list[ScoredRecord]:
    """Score, sort and de-duplicate *records*, keeping the best *limit*."""
    scored = sorted(
        (score_record(r, tokens, cwd, now, directory_boost) for r in records),
        key=ScoredRecord.sort_key,
    )
    seen: set[str] = set()
    ranked: list[ScoredRecord] = []
    for item in scored:
        if item.record.command in seen:
            continue
        seen.add(item.record.command)
        ranked.append(item)
        if len(ranked) >= limit:
            break
    return ranked
