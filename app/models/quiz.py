from enum import Enum

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

JOIN_CODE_LENGTH = 6


class QuizStatus(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    CLOSED = "closed"


class Quiz(Base, TimestampMixin):
    __tablename__ = "quizzes"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    duration_minutes: Mapped[int] = mapped_column(nullable=False)
    # 생성 시 한 번만 발급, 이후 변경하지 않음
    join_code: Mapped[str] = mapped_column(String(JOIN_CODE_LENGTH), nullable=False, unique=True, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=QuizStatus.WAITING.value, index=True)

    questions: Mapped[list["Question"]] = relationship(
        "Question",
        back_populates="quiz",
        passive_deletes=True,
        order_by="Question.number",
    )
    submissions: Mapped[list["Submission"]] = relationship(
        "Submission",
        back_populates="quiz",
        passive_deletes=True,
    )
