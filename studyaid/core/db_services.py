"""Database service classes for flashcard sets, quizzes and dashboard stats."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from studyaid.core.db.schemas.auth import User
from studyaid.core.db.schemas.flashcards import FlashcardSet, Flashcard
from studyaid.core.db.schemas.quiz import Quiz, QuizQuestion, QuizResult
from studyaid.modules.flashcards.progress import apply_study_result, set_mastery
from studyaid.modules.generation.models import ValidatedFlashcard, ValidatedQuizQuestion
from studyaid.modules.quiz.stats import DashboardStats


class FlashcardSetService:
    """Service for storing flashcard sets and study progress."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save_flashcard_set(
        self,
        *,
        user_id: int,
        title: str,
        subject: str,
        cards: Sequence[ValidatedFlashcard],
    ) -> FlashcardSet:
        """Save validated cards as a new set with zero mastery."""
        db_set = FlashcardSet(
            user_id=user_id,
            title=title,
            subject=subject,
            mastery_level=0,
        )
        self.session.add(db_set)
        await self.session.flush()

        for index, card in enumerate(cards):
            self.session.add(
                Flashcard(
                    flashcard_set_id=db_set.id,
                    question=card.question,
                    answer=card.answer,
                    mastery_level=0,
                    order_index=index,
                )
            )

        await self.session.commit()
        return await self.get_set(db_set.id, user_id=user_id)  # type: ignore[return-value]

    async def list_sets(self, user_id: int) -> list[FlashcardSet]:
        rows = await self.session.execute(
            select(FlashcardSet)
            .options(selectinload(FlashcardSet.flashcards))
            .where(FlashcardSet.user_id == user_id)
            .order_by(FlashcardSet.created_at.desc())
        )
        return list(rows.scalars().all())

    async def get_set(self, set_id: int, *, user_id: int) -> Optional[FlashcardSet]:
        result = await self.session.execute(
            select(FlashcardSet)
            .options(selectinload(FlashcardSet.flashcards))
            .where(FlashcardSet.id == set_id, FlashcardSet.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def delete_set(self, set_id: int, *, user_id: int) -> bool:
        db_set = await self.get_set(set_id, user_id=user_id)
        if not db_set:
            return False
        await self.session.delete(db_set)
        await self.session.commit()
        return True

    async def record_study(
        self,
        set_id: int,
        *,
        user_id: int,
        card_id: int,
        known: bool,
    ) -> Optional[tuple[Flashcard, FlashcardSet]]:
        """Update one card's mastery and the set average.

        Raises LookupError when the card is not part of the set; returns None when
        the set itself is missing.
        """
        db_set = await self.get_set(set_id, user_id=user_id)
        if not db_set:
            return None
        card = next((c for c in db_set.flashcards if c.id == card_id), None)
        if card is None:
            raise LookupError("card_not_found")

        card.mastery_level = apply_study_result(card.mastery_level, known)
        db_set.last_studied = datetime.now()
        db_set.mastery_level = set_mastery(c.mastery_level for c in db_set.flashcards)
        await self.session.commit()
        return card, db_set


class QuizService:
    """Service for storing generated quizzes and their results."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save_quiz(
        self,
        *,
        user_id: int,
        title: str,
        subject: str,
        difficulty: str,
        time_limit: int,
        num_questions: int,
        questions: Sequence[ValidatedQuizQuestion],
    ) -> Quiz:
        quiz = Quiz(
            user_id=user_id,
            title=title,
            subject=subject,
            difficulty=difficulty,
            time_limit=time_limit,
            num_questions=num_questions,
            status="not-started",
        )
        self.session.add(quiz)
        await self.session.flush()

        for index, q in enumerate(questions):
            self.session.add(
                QuizQuestion(
                    quiz_id=quiz.id,
                    order_index=index,
                    question=q.question,
                    options=list(q.options),
                    correct_answer=q.correct_answer,
                )
            )

        await self.session.commit()
        return await self.get_quiz(quiz.id, user_id=user_id)  # type: ignore[return-value]

    async def list_quizzes(self, user_id: int) -> list[Quiz]:
        rows = await self.session.execute(
            select(Quiz).where(Quiz.user_id == user_id).order_by(Quiz.created_at.desc())
        )
        return list(rows.scalars().all())

    async def get_quiz(self, quiz_id: int, *, user_id: int) -> Optional[Quiz]:
        result = await self.session.execute(
            select(Quiz)
            .options(selectinload(Quiz.questions))
            .where(Quiz.id == quiz_id, Quiz.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def delete_quiz(self, quiz_id: int, *, user_id: int) -> bool:
        quiz = await self.get_quiz(quiz_id, user_id=user_id)
        if not quiz:
            return False
        await self.session.execute(delete(QuizResult).where(QuizResult.quiz_id == quiz_id))
        await self.session.execute(delete(QuizQuestion).where(QuizQuestion.quiz_id == quiz_id))
        await self.session.execute(delete(Quiz).where(Quiz.id == quiz_id))
        await self.session.commit()
        return True

    async def save_result(
        self,
        *,
        user_id: int,
        quiz_id: int,
        score: int,
        answers: list[int],
        time_spent: float,
    ) -> QuizResult:
        result = QuizResult(
            user_id=user_id,
            quiz_id=quiz_id,
            score=score,
            answers=answers,
            time_spent=time_spent,
        )
        self.session.add(result)
        await self.session.commit()
        await self.session.refresh(result)
        return result

    async def latest_scores(self, user_id: int) -> dict[int, int]:
        """quiz_id -> score of the most recent result."""
        rows = await self.session.execute(
            select(QuizResult)
            .where(QuizResult.user_id == user_id)
            .order_by(QuizResult.created_at.asc())
        )
        return {r.quiz_id: r.score for r in rows.scalars().all()}

    async def get_result(self, quiz_id: int, *, user_id: int) -> Optional[QuizResult]:
        rows = await self.session.execute(
            select(QuizResult)
            .where(QuizResult.quiz_id == quiz_id, QuizResult.user_id == user_id)
            .order_by(QuizResult.created_at.desc())
            .limit(1)
        )
        return rows.scalar_one_or_none()


class DashboardService:
    """Reads recent activity and keeps the user's stat columns current."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def recent_results(self, user_id: int, limit: int = 5) -> list[QuizResult]:
        rows = await self.session.execute(
            select(QuizResult)
            .options(selectinload(QuizResult.quiz))
            .where(QuizResult.user_id == user_id)
            .order_by(QuizResult.created_at.desc())
            .limit(limit)
        )
        return list(rows.scalars().all())

    async def upcoming_quizzes(self, user_id: int, limit: int = 5) -> list[Quiz]:
        rows = await self.session.execute(
            select(Quiz)
            .where(Quiz.user_id == user_id, Quiz.status == "not-started")
            .order_by(Quiz.created_at.desc())
            .limit(limit)
        )
        return list(rows.scalars().all())

    async def store_stats(self, user_id: int, stats: DashboardStats) -> None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user:
            user.quizzes_taken = stats.quizzes_taken
            user.total_score = stats.total_score
            user.hours_practiced = stats.hours_practiced
            await self.session.commit()
