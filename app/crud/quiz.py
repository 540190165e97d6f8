import secrets
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Question
from app.models.quiz import JOIN_CODE_LENGTH, Quiz, QuizStatus
from app.models.submission import Submission


def generate_join_code() -> str:
    """6자리 16진수 참여 코드 생성 (대문자)"""
    return secrets.token_hex(JOIN_CODE_LENGTH // 2).upper()


def _locked(stmt, for_update: bool, read: bool):
    """행 잠금 적용 (잠금 시 세션에 남아 있는 값도 다시 읽음)"""
    if not for_update:
        return stmt
    return stmt.with_for_update(read=read).execution_options(populate_existing=True)


async def get_quiz_by_id(
    session: AsyncSession,
    quiz_id: int,
    for_update: bool = False,
    read: bool = False,
) -> Quiz | None:
    """ID로 퀴즈 조회

    for_update=True면 행 잠금(read=True면 공유 잠금)을 건다. 상태 변경과
    시험 시작/입장을 같은 퀴즈 행 기준으로 직렬화할 때 사용한다.
    """
    stmt = _locked(select(Quiz).where(Quiz.id == quiz_id), for_update, read)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_quiz_by_join_code(
    session: AsyncSession,
    join_code: str,
    for_update: bool = False,
    read: bool = False,
) -> Quiz | None:
    """참여 코드로 퀴즈 조회 (대소문자 무시)"""
    stmt = _locked(select(Quiz).where(Quiz.join_code == join_code.strip().upper()), for_update, read)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_all_quizzes(session: AsyncSession) -> Sequence[Quiz]:
    """모든 퀴즈 조회 (최신순)"""
    result = await session.execute(select(Quiz).order_by(Quiz.created_at.desc(), Quiz.id.desc()))
    return result.scalars().all()


async def create_quiz(
    session: AsyncSession,
    title: str,
    duration_minutes: int,
    join_code: str,
    description: str | None = None,
) -> Quiz:
    """퀴즈 생성"""
    quiz = Quiz(
        title=title,
        description=description,
        duration_minutes=duration_minutes,
        join_code=join_code,
        status=QuizStatus.WAITING.value,
    )
    session.add(quiz)
    await session.commit()
    await session.refresh(quiz)
    return quiz


async def update_quiz(session: AsyncSession, quiz: Quiz, **fields) -> Quiz:
    """퀴즈 필드 수정 (None 값은 무시)"""
    for name, value in fields.items():
        if value is not None:
            setattr(quiz, name, value)
    await session.commit()
    await session.refresh(quiz)
    return quiz


async def update_quiz_status(session: AsyncSession, quiz: Quiz, status: QuizStatus) -> Quiz:
    """퀴즈 상태 변경"""
    quiz.status = status.value
    await session.commit()
    await session.refresh(quiz)
    return quiz


async def delete_quiz(session: AsyncSession, quiz: Quiz) -> None:
    """퀴즈 삭제 (문제, 제출 기록 포함)"""
    await session.execute(delete(Submission).where(Submission.quiz_id == quiz.id))
    await session.execute(delete(Question).where(Question.quiz_id == quiz.id))
    await session.delete(quiz)
    await session.commit()
