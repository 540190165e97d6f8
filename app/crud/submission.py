from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.models.submission import Submission, SubmissionStatus


async def get_submission_by_id(session: AsyncSession, submission_id: int) -> Submission | None:
    """ID로 제출 기록 조회"""
    result = await session.execute(select(Submission).where(Submission.id == submission_id))
    return result.scalar_one_or_none()


async def get_submission_by_quiz_and_team(
    session: AsyncSession,
    quiz_id: int,
    team_id: int,
) -> Submission | None:
    """퀴즈 ID와 팀 ID로 제출 기록 조회 ((quiz_id, team_id)는 유일)"""
    result = await session.execute(
        select(Submission).where(
            Submission.quiz_id == quiz_id,
            Submission.team_id == team_id,
        )
    )
    return result.scalar_one_or_none()


async def create_submission(
    session: AsyncSession,
    quiz_id: int,
    team_id: int,
    start_time: datetime,
    end_time: datetime,
    status: SubmissionStatus,
) -> Submission:
    """제출 기록 생성

    동일 (quiz_id, team_id) 기록이 이미 있으면 유니크 제약 위반으로
    IntegrityError가 발생한다. 처리는 호출 측 책임.
    """
    submission = Submission(
        quiz_id=quiz_id,
        team_id=team_id,
        start_time=start_time,
        end_time=end_time,
        answers={},
        status=status.value,
        score=0,
        duration_ms=0,
        violation_count=0,
    )
    session.add(submission)
    await session.commit()
    await session.refresh(submission)
    return submission


async def get_submissions_by_quiz(session: AsyncSession, quiz_id: int) -> Sequence[Submission]:
    """퀴즈의 모든 제출 기록 조회"""
    result = await session.execute(
        select(Submission).where(Submission.quiz_id == quiz_id).order_by(Submission.id)
    )
    return result.scalars().all()


async def get_open_submissions_by_quiz(session: AsyncSession, quiz_id: int) -> Sequence[Submission]:
    """종료되지 않은(pending/active) 제출 기록 조회"""
    result = await session.execute(
        select(Submission)
        .where(
            Submission.quiz_id == quiz_id,
            Submission.status.in_([SubmissionStatus.PENDING.value, SubmissionStatus.ACTIVE.value]),
        )
        .order_by(Submission.id)
    )
    return result.scalars().all()


async def get_completed_submissions_ranked(
    session: AsyncSession,
    quiz_id: int,
    limit: int,
) -> Sequence[Submission]:
    """완료된 제출 기록을 점수 내림차순, 소요 시간 오름차순으로 조회"""
    result = await session.execute(
        select(Submission)
        .options(joinedload(Submission.team))
        .where(
            Submission.quiz_id == quiz_id,
            Submission.status == SubmissionStatus.COMPLETED.value,
        )
        .order_by(Submission.score.desc(), Submission.duration_ms.asc(), Submission.id.asc())
        .limit(limit)
    )
    return result.scalars().all()


async def count_participants(session: AsyncSession, quiz_id: int) -> int:
    """퀴즈 참가 팀 수 (제출 기록이 있는 고유 팀 수)"""
    count = await session.scalar(
        select(func.count(func.distinct(Submission.team_id))).where(Submission.quiz_id == quiz_id)
    )
    return count or 0


async def save_submission(session: AsyncSession, submission: Submission) -> Submission:
    """변경된 제출 기록 저장"""
    await session.commit()
    await session.refresh(submission)
    return submission


async def delete_submissions_by_quiz(session: AsyncSession, quiz_id: int) -> int:
    """퀴즈의 모든 제출 기록 삭제, 삭제 건수 반환"""
    result = await session.execute(delete(Submission).where(Submission.quiz_id == quiz_id))
    await session.commit()
    return result.rowcount or 0
