"""
Session history aggregation.

History is append-only: a session, once appended, stays, and later
sessions never sort before earlier ones. Invalid sessions are kept for the
record but ignored by every aggregate here (records, recent results).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from loguru import logger

from mathsprint.core.models import QuestionResult, SessionStats


class SessionHistory:
    """
    Immutable, date-ordered sequence of completed sessions.

    appended() returns a new history; the original is untouched, so a
    history handed to the scorer or detector cannot change underneath it.
    """

    __slots__ = ("_sessions",)

    def __init__(self, sessions: Iterable[SessionStats] = ()):
        ordered: list[SessionStats] = []
        for session in sessions:
            if ordered and session.date < ordered[-1].date:
                raise ValueError(
                    f"Session dated {session.date.isoformat()} precedes "
                    f"last recorded session {ordered[-1].date.isoformat()}"
                )
            ordered.append(session)
        self._sessions: tuple[SessionStats, ...] = tuple(ordered)

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[SessionStats]:
        return iter(self._sessions)

    def __getitem__(self, index):
        return self._sessions[index]

    def __repr__(self) -> str:
        return f"SessionHistory({len(self._sessions)} sessions)"

    def appended(self, session: SessionStats) -> SessionHistory:
        """Return a new history with `session` at the end."""
        return SessionHistory((*self._sessions, session))

    def valid_sessions(self) -> list[SessionStats]:
        """Sessions eligible for analytics."""
        return [s for s in self._sessions if s.valid]

    @property
    def latest(self) -> SessionStats | None:
        return self._sessions[-1] if self._sessions else None


@dataclass(frozen=True)
class PersonalRecords:
    """Best values across all valid sessions. None until a valid session exists."""

    best_accuracy: float | None = None
    fastest_avg_response_ms: float | None = None
    most_xp: int | None = None
    best_fluency: float | None = None
    most_questions: int | None = None


def personal_records(history: Iterable[SessionStats]) -> PersonalRecords:
    """
    Compute personal records over valid sessions.

    Args:
        history: SessionHistory or any iterable of sessions

    Returns:
        PersonalRecords
    """
    valid = [s for s in history if s.valid]
    if not valid:
        return PersonalRecords()

    timed = [s.avg_response_time_ms for s in valid if s.avg_response_time_ms > 0]
    return PersonalRecords(
        best_accuracy=max(s.accuracy for s in valid),
        fastest_avg_response_ms=min(timed) if timed else None,
        most_xp=max(s.xp_earned for s in valid),
        best_fluency=max(s.fluency_score for s in valid),
        most_questions=max(s.total_questions for s in valid),
    )


def check_personal_records(
    history: Iterable[SessionStats],
    session: SessionStats,
) -> list[str]:
    """
    List the records `session` beats, compared with prior history.

    Invalid sessions never set records. The first valid session sets none
    either: there is nothing to beat yet.

    Returns:
        Record names, e.g. ["best_accuracy", "most_xp"]
    """
    if not session.valid:
        return []

    prior = personal_records(history)
    if prior.best_accuracy is None:
        return []

    broken = []
    if session.accuracy > prior.best_accuracy:
        broken.append("best_accuracy")
    if (
        prior.fastest_avg_response_ms is not None
        and 0 < session.avg_response_time_ms < prior.fastest_avg_response_ms
    ):
        broken.append("fastest_avg_response_ms")
    if session.xp_earned > prior.most_xp:
        broken.append("most_xp")
    if session.fluency_score > prior.best_fluency:
        broken.append("best_fluency")
    if session.total_questions > prior.most_questions:
        broken.append("most_questions")

    if broken:
        logger.debug(f"Session on {session.date.date()} set records: {', '.join(broken)}")
    return broken


def recent_results(history: Iterable[SessionStats], limit: int = 100) -> list[QuestionResult]:
    """
    Most recent question results from valid sessions, oldest first.

    Args:
        history: Sessions in chronological order
        limit: Maximum number of results to return

    Returns:
        Up to `limit` QuestionResults
    """
    if limit <= 0:
        return []
    collected: list[QuestionResult] = []
    for session in history:
        if session.valid:
            collected.extend(session.results)
    return collected[-limit:]
