"""Quiz module exports."""

from .generator import generate_quiz_questions
from .stats import DashboardStats, summarize_results

__all__ = ["generate_quiz_questions", "DashboardStats", "summarize_results"]
