from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Question


async def get_question_by_id(session: AsyncSession, question_id: int) -> Question | None:
    """ID로 문제 조회"""
    result = await session.execute(select(Question).where(Question.id == question_id))
    return result.scalar_one_or_none()


async def get_questions_by_quiz_id(session: AsyncSession, quiz_id: int) -> Sequence[Question]:
    """퀴즈의 문제 목록 조회 (문제 번호순)"""
    result = await session.execute(
        select(Question)
        .where(Question.quiz_id == quiz_id)
        .order_by(Question.number, Question.id)
    )
    return result.scalars().all()


async def get_answer_key(session: AsyncSession, quiz_id: int) -> dict[int, str]:
    """퀴즈의 정답표 조회 (문제 ID → 정답 선택지 ID)"""
    result = await session.execute(
        select(Question.id, Question.correct_option_id).where(Question.quiz_id == quiz_id)
    )
    return {row.id: row.correct_option_id for row in result.all()}


async def create_question(
    session: AsyncSession,
    quiz_id: int,
    number: int,
    text: str,
    options: list[dict],
    correct_option_id: str,
    image_url: str | None = None,
    table_html: str | None = None,
) -> Question:
    """문제 생성"""
    question = Question(
        quiz_id=quiz_id,
        number=number,
        text=text,
        options=options,
        correct_option_id=correct_option_id,
        image_url=image_url,
        table_html=table_html,
    )
    session.add(question)
    await session.commit()
    await session.refresh(question)
    return question


async def update_question(session: AsyncSession, question: Question, **fields) -> Question:
    """문제 필드 수정 (None 값은 무시)"""
    for name, value in fields.items():
        if value is not None:
            setattr(question, name, value)
    await session.commit()
    await session.refresh(question)
    return question


async def delete_question(session: AsyncSession, question: Question) -> None:
    """문제 삭제"""
    await session.delete(question)
    await session.commit()
