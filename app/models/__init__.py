from app.models.base import Base, get_db
from app.models.question import Question
from app.models.quiz import Quiz, QuizStatus
from app.models.submission import Submission, SubmissionStatus
from app.models.team import Team, TeamRole

__all__ = [
    "Base",
    "Team",
    "TeamRole",
    "Quiz",
    "QuizStatus",
    "Question",
    "Submission",
    "SubmissionStatus",
    "get_db",
]
