from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Question(Base, TimestampMixin):
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True)
    quiz_id: Mapped[int] = mapped_column(ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    number: Mapped[int] = mapped_column(nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)  # LaTeX 포함 가능
    image_url: Mapped[str | None] = mapped_column(String(500), default=None)
    table_html: Mapped[str | None] = mapped_column(Text, default=None)
    # [{"id": "A", "text": "..."}, ...] 순서 유지
    options: Mapped[list[dict]] = mapped_column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    correct_option_id: Mapped[str] = mapped_column(String(16), nullable=False)

    quiz: Mapped["Quiz"] = relationship("Quiz", back_populates="questions")

    @property
    def option_ids(self) -> set[str]:
        return {option["id"] for option in self.options}
