from datetime import datetime

from pydantic import BaseModel, Field


class TeamCreateRequest(BaseModel):
    """팀 등록 요청 스키마"""
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255, description="대표 이메일")
    team_name: str = Field(..., min_length=1, max_length=100, description="팀 이름 (중복 불가)")
    leader_name: str = Field(..., min_length=1, max_length=100, description="팀장 이름")
    school: str = Field(..., min_length=1, max_length=200, description="소속 학교")


class TeamResponse(BaseModel):
    """팀 응답 스키마"""
    id: int
    email: str
    team_name: str
    leader_name: str
    school: str
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}


class TeamListResponse(BaseModel):
    """팀 목록 응답 스키마"""
    teams: list[TeamResponse]
    total: int
