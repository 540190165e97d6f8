from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.question import QuestionPublicResponse

# 문제 ID → 선택지 ID
AnswerMap = dict[int, str]


class ExamAnswersRequest(BaseModel):
    """답안 저장/제출 요청 스키마"""
    answers: AnswerMap = Field(default_factory=dict, description="문제 ID별 선택지 ID")


class SubmissionResponse(BaseModel):
    """제출 기록 응답 스키마"""
    id: int
    quiz_id: int
    team_id: int
    start_time: datetime
    end_time: datetime
    answers: dict[str, str]
    status: str
    submitted_at: datetime | None
    score: int
    duration_ms: int
    violation_count: int

    model_config = {"from_attributes": True}


class ExamStartResponse(BaseModel):
    """시험 시작/재개 응답 스키마"""
    submission: SubmissionResponse
    questions: list[QuestionPublicResponse]


class ExamSubmitResponse(BaseModel):
    """답안 제출 응답 스키마"""
    message: str
    already_completed: bool = Field(False, description="이미 제출된 기록을 그대로 반환했는지 여부")
    result: SubmissionResponse


class ExamStatusResponse(BaseModel):
    """대기실/시험 중 폴링용 상태 응답 스키마"""
    quiz_id: int
    title: str
    status: str
    duration_minutes: int
    participant_count: int


class LeaderboardEntry(BaseModel):
    """순위표 항목"""
    rank: int
    submission_id: int
    team_id: int
    team_name: str
    school: str
    score: int
    duration_ms: int
    submitted_at: datetime | None


class LeaderboardResponse(BaseModel):
    """순위표 응답 스키마"""
    quiz_id: int
    entries: list[LeaderboardEntry]
    total: int


class SubmissionListResponse(BaseModel):
    """관리자용 제출 기록 목록"""
    submissions: list[SubmissionResponse]
    total: int
