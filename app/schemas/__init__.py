from app.schemas.exam import (
    AnswerMap,
    ExamAnswersRequest,
    ExamStartResponse,
    ExamStatusResponse,
    ExamSubmitResponse,
    LeaderboardEntry,
    LeaderboardResponse,
    SubmissionListResponse,
    SubmissionResponse,
)
from app.schemas.question import (
    QuestionAdminResponse,
    QuestionCreateRequest,
    QuestionListResponse,
    QuestionOption,
    QuestionPublicResponse,
    QuestionUpdateRequest,
)
from app.schemas.quiz import (
    QuizCreateRequest,
    QuizListResponse,
    QuizResetResponse,
    QuizResponse,
    QuizStatusChangeResponse,
    QuizStatusUpdateRequest,
    QuizUpdateRequest,
)
from app.schemas.team import (
    TeamCreateRequest,
    TeamListResponse,
    TeamResponse,
)

__all__ = [
    "AnswerMap",
    "ExamAnswersRequest",
    "ExamStartResponse",
    "ExamStatusResponse",
    "ExamSubmitResponse",
    "LeaderboardEntry",
    "LeaderboardResponse",
    "SubmissionListResponse",
    "SubmissionResponse",
    "QuestionOption",
    "QuestionCreateRequest",
    "QuestionUpdateRequest",
    "QuestionPublicResponse",
    "QuestionAdminResponse",
    "QuestionListResponse",
    "QuizCreateRequest",
    "QuizUpdateRequest",
    "QuizStatusUpdateRequest",
    "QuizResponse",
    "QuizListResponse",
    "QuizResetResponse",
    "QuizStatusChangeResponse",
    "TeamCreateRequest",
    "TeamResponse",
    "TeamListResponse",
]
