from datetime import datetime

from pydantic import BaseModel, Field


class QuestionOption(BaseModel):
    """선택지 (텍스트는 LaTeX 포함 가능)"""
    id: str = Field(..., min_length=1, max_length=16, description="선택지 ID (예: 'A')")
    text: str = Field(..., min_length=1, description="선택지 텍스트")


class QuestionCreateRequest(BaseModel):
    """문제 생성 요청 스키마"""
    quiz_id: int = Field(..., description="퀴즈 ID")
    number: int = Field(..., ge=1, description="문제 번호")
    text: str = Field(..., min_length=1, description="문제 본문")
    options: list[QuestionOption] = Field(..., min_length=2, description="선택지 목록 (순서 유지)")
    correct_option_id: str = Field(..., min_length=1, max_length=16, description="정답 선택지 ID")
    image_url: str | None = Field(None, max_length=500, description="외부 업로드 서비스의 이미지 URL")
    table_html: str | None = Field(None, description="표 HTML")


class QuestionUpdateRequest(BaseModel):
    """문제 수정 요청 스키마"""
    number: int | None = Field(None, ge=1)
    text: str | None = Field(None, min_length=1)
    options: list[QuestionOption] | None = Field(None, min_length=2)
    correct_option_id: str | None = Field(None, min_length=1, max_length=16)
    image_url: str | None = Field(None, max_length=500)
    table_html: str | None = None


class QuestionPublicResponse(BaseModel):
    """참가자용 문제 응답 스키마 (정답 필드 없음)"""
    id: int
    quiz_id: int
    number: int
    text: str
    image_url: str | None
    table_html: str | None
    options: list[QuestionOption]

    model_config = {"from_attributes": True}


class QuestionAdminResponse(QuestionPublicResponse):
    """관리자용 문제 응답 스키마"""
    correct_option_id: str
    created_at: datetime


class QuestionListResponse(BaseModel):
    """관리자용 문제 목록 응답 스키마"""
    questions: list[QuestionAdminResponse]
    total: int
