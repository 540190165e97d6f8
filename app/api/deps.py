from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import team as team_crud
from app.exceptions import AdminRequiredError, UnauthenticatedError
from app.models.base import get_db


@dataclass(frozen=True)
class Identity:
    """인증 게이트웨이가 확인한 호출 팀 정보"""
    participant_id: int
    is_admin: bool


async def get_current_identity(
    x_team_id: int | None = Header(None, description="인증 게이트웨이가 전달한 팀 ID"),
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """요청 헤더의 팀 ID로 호출자 확인

    로그인/토큰 검증은 외부 인증 서비스가 담당하며, 여기서는 전달된 팀이
    실제로 존재하는지만 확인한다.
    """
    if x_team_id is None:
        raise UnauthenticatedError()
    team = await team_crud.get_team_by_id(db, x_team_id)
    if not team:
        raise UnauthenticatedError(f"등록되지 않은 팀입니다: {x_team_id}")
    return Identity(participant_id=team.id, is_admin=team.is_admin)


async def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    """관리자 전용 API 가드"""
    if not identity.is_admin:
        raise AdminRequiredError()
    return identity
