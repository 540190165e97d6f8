import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import team as team_crud
from app.exceptions import InvalidRequestError, TeamNotFoundError
from app.models.team import TeamRole
from app.schemas import team as team_schema

logger = logging.getLogger(__name__)


async def register_team(
    session: AsyncSession,
    request: team_schema.TeamCreateRequest,
    role: TeamRole = TeamRole.PARTICIPANT,
) -> team_schema.TeamResponse:
    """팀 등록 (이메일, 팀 이름 중복 불가)

    공개 등록 API는 항상 참가자 역할로 등록하며, 관리자 계정은
    scripts/setup/create-admin.py로만 만든다.
    """
    email = request.email.strip().lower()
    team_name = request.team_name.strip()

    existing = await team_crud.get_team_by_email_or_name(session, email, team_name)
    if existing:
        if existing.email == email:
            raise InvalidRequestError("이미 등록된 이메일입니다")
        raise InvalidRequestError("이미 사용 중인 팀 이름입니다")

    team = await team_crud.create_team(
        session,
        email=email,
        team_name=team_name,
        leader_name=request.leader_name.strip(),
        school=request.school.strip(),
        role=role.value,
    )
    logger.info(f"팀 등록: team_id={team.id}, role={team.role}")
    return team_schema.TeamResponse.model_validate(team)


async def list_teams(session: AsyncSession) -> team_schema.TeamListResponse:
    """참가 팀 목록 (관리자 계정 제외)"""
    teams = await team_crud.get_participant_teams(session)
    team_responses = [team_schema.TeamResponse.model_validate(t) for t in teams]
    return team_schema.TeamListResponse(teams=team_responses, total=len(team_responses))


async def delete_team(session: AsyncSession, team_id: int) -> None:
    """팀 삭제 (관리자 계정은 삭제 불가)"""
    team = await team_crud.get_team_by_id(session, team_id)
    if not team:
        raise TeamNotFoundError(team_id)
    if team.is_admin:
        raise InvalidRequestError("관리자 계정은 삭제할 수 없습니다")

    await team_crud.delete_team(session, team)
    logger.info(f"팀 삭제: team_id={team_id}")
