from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.models.base import get_db
from app.schemas import team as team_schema
from app.services import team_service

router = APIRouter(prefix="/teams", tags=["teams"])


@router.post("", response_model=team_schema.TeamResponse, status_code=status.HTTP_201_CREATED)
async def register_team(
    request: team_schema.TeamCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """팀 등록 API"""
    return await team_service.register_team(db, request)


@router.get("", response_model=team_schema.TeamListResponse, dependencies=[Depends(require_admin)])
async def list_teams(
    db: AsyncSession = Depends(get_db),
):
    """참가 팀 목록 조회 API (관리자)"""
    return await team_service.list_teams(db)


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_team(
    team_id: int,
    db: AsyncSession = Depends(get_db),
):
    """팀 삭제 API (관리자)"""
    await team_service.delete_team(db, team_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
