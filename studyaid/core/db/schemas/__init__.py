# Import models so Alembic and Base metadata are aware of them
from .auth import User  # noqa: F401
from .flashcards import FlashcardSet, Flashcard  # noqa: F401
from .quiz import Quiz, QuizQuestion, QuizResult  # noqa: F401
