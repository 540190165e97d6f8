from typing import Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.submission import Submission
from app.models.team import Team, TeamRole


async def get_team_by_id(session: AsyncSession, team_id: int) -> Team | None:
    """ID로 팀 조회"""
    result = await session.execute(select(Team).where(Team.id == team_id))
    return result.scalar_one_or_none()


async def get_team_by_email_or_name(session: AsyncSession, email: str, team_name: str) -> Team | None:
    """이메일 또는 팀 이름으로 중복 팀 확인"""
    result = await session.execute(
        select(Team).where(or_(Team.email == email, Team.team_name == team_name)).limit(1)
    )
    return result.scalar_one_or_none()


async def get_participant_teams(session: AsyncSession) -> Sequence[Team]:
    """참가 팀 목록 조회 (관리자 제외)"""
    result = await session.execute(
        select(Team).where(Team.role == TeamRole.PARTICIPANT.value).order_by(Team.id)
    )
    return result.scalars().all()


async def create_team(
    session: AsyncSession,
    email: str,
    team_name: str,
    leader_name: str,
    school: str,
    role: str = TeamRole.PARTICIPANT.value,
) -> Team:
    """팀 생성"""
    team = Team(
        email=email,
        team_name=team_name,
        leader_name=leader_name,
        school=school,
        role=role,
    )
    session.add(team)
    await session.commit()
    await session.refresh(team)
    return team


async def delete_team(session: AsyncSession, team: Team) -> None:
    """팀 삭제 (제출 기록 포함)"""
    await session.execute(delete(Submission).where(Submission.team_id == team.id))
    await session.delete(team)
    await session.commit()
