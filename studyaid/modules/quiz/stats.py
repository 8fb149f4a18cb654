"""Aggregate quiz results for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class DashboardStats:
    quizzes_taken: int
    average_score: int
    total_score: int
    hours_practiced: float


def summarize_results(scores: Sequence[int], seconds_spent: Sequence[float]) -> DashboardStats:
    taken = len(scores)
    total = sum(scores)
    average = round(total / taken) if taken else 0
    hours = sum(seconds_spent) / 3600
    return DashboardStats(
        quizzes_taken=taken,
        average_score=average,
        total_score=total,
        hours_practiced=hours,
    )
