from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.core.config import settings


class QuizCreateRequest(BaseModel):
    """퀴즈 생성 요청 스키마"""
    title: str = Field(..., min_length=1, max_length=200, description="퀴즈 제목")
    description: str | None = Field(None, description="퀴즈 설명")
    duration_minutes: int = Field(
        default_factory=lambda: settings.default_quiz_duration_minutes,
        ge=1,
        le=24 * 60,
        description="제한 시간 (분)",
    )


class QuizUpdateRequest(BaseModel):
    """퀴즈 수정 요청 스키마 (참여 코드와 상태는 수정 불가)"""
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    duration_minutes: int | None = Field(None, ge=1, le=24 * 60)


class QuizStatusUpdateRequest(BaseModel):
    """퀴즈 상태 변경 요청 스키마 (대기 상태 복귀는 reset API 사용)"""
    status: Literal["active", "closed"] = Field(..., description="변경할 상태")


class QuizResponse(BaseModel):
    """퀴즈 응답 스키마"""
    id: int
    title: str
    description: str | None
    duration_minutes: int
    join_code: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class QuizListResponse(BaseModel):
    """퀴즈 목록 응답 스키마"""
    quizzes: list[QuizResponse]
    total: int


class QuizResetResponse(BaseModel):
    """퀴즈 초기화 결과"""
    quiz: QuizResponse
    deleted_submissions: int


class QuizStatusChangeResponse(BaseModel):
    """퀴즈 상태 변경 결과 (종료 시 자동 제출 건수 포함)"""
    quiz: QuizResponse
    auto_submitted: int = 0
