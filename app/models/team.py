from enum import Enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class TeamRole(str, Enum):
    PARTICIPANT = "participant"
    ADMIN = "admin"


class Team(Base, TimestampMixin):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    team_name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    leader_name: Mapped[str] = mapped_column(String(100), nullable=False)
    school: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=TeamRole.PARTICIPANT.value)

    submissions: Mapped[list["Submission"]] = relationship(
        "Submission",
        back_populates="team",
        passive_deletes=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == TeamRole.ADMIN
