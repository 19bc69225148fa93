"""
Trend classification for error patterns.

A pattern's trend compares how often it shows up in the older half of the
session history against the newer half.
"""

from typing import List, Optional, Sequence

from emerge_analytics.data.models import AnalysisThresholds, Session, Trend

# Below this many sessions there is not enough signal to call a trend.
MIN_TREND_SESSIONS = 4


def sort_sessions_by_date(sessions: Sequence[Session]) -> List[Session]:
    """
    Sort sessions oldest first; sessions on the same date keep their order.

    Args:
        sessions: Sessions in any order

    Returns:
        List[Session]: New sorted list
    """
    return sorted(sessions, key=lambda session: session.date)


def _sessions_with_pattern(pattern: str, sessions: Sequence[Session]) -> int:
    # A session counts once however many times the pattern was logged in it
    return sum(1 for session in sessions if session.has_pattern(pattern))


def classify_trend(
    pattern: str,
    sessions: Sequence[Session],
    thresholds: Optional[AnalysisThresholds] = None,
    presorted: bool = False,
) -> Trend:
    """
    Label a pattern improving, declining or stable over the session history.

    Sessions are split at floor(n/2) into an older and a newer half (the
    older half is the smaller one on odd counts). The share of sessions in
    each half that logged the pattern is compared: a drop of more than
    trend_shift is improving, a rise of more than trend_shift is declining.

    Args:
        pattern: Error pattern name
        sessions: Completed sessions
        thresholds: Engine thresholds (defaults when omitted)
        presorted: Whether sessions are already in date order

    Returns:
        Trend: Classification for the pattern
    """
    thresholds = thresholds or AnalysisThresholds()
    if len(sessions) < MIN_TREND_SESSIONS:
        return Trend.STABLE

    ordered = list(sessions) if presorted else sort_sessions_by_date(sessions)
    midpoint = len(ordered) // 2
    first_half = ordered[:midpoint]
    second_half = ordered[midpoint:]

    first_rate = _sessions_with_pattern(pattern, first_half) / len(first_half)
    second_rate = _sessions_with_pattern(pattern, second_half) / len(second_half)

    diff = second_rate - first_rate
    if diff < -thresholds.trend_shift:
        return Trend.IMPROVING
    if diff > thresholds.trend_shift:
        return Trend.DECLINING
    return Trend.STABLE
