"""테스트 공통 픽스처 (인메모리 SQLite + ASGI 클라이언트)"""
import os

os.environ.setdefault("ENVIRONMENT", "test")


import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.models import Base, Question, Quiz, Team
from app.models.base import get_db
from app.models.quiz import QuizStatus
from app.models.team import TeamRole


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def test_db_session(test_session_maker):
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(test_session_maker):
    """get_db를 테스트 DB로 교체한 비동기 API 클라이언트"""
    async def override_get_db():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_team(test_db_session):
    team = Team(
        email="admin@example.com",
        team_name="운영팀",
        leader_name="관리자",
        school="운영본부",
        role=TeamRole.ADMIN.value,
    )
    test_db_session.add(team)
    await test_db_session.commit()
    return team


@pytest_asyncio.fixture
async def teams(test_db_session):
    """참가 팀 3개"""
    created = [
        Team(
            email=f"team{i}@example.com",
            team_name=f"팀{i}",
            leader_name=f"팀장{i}",
            school=f"제{i}고등학교",
            role=TeamRole.PARTICIPANT.value,
        )
        for i in range(1, 4)
    ]
    test_db_session.add_all(created)
    await test_db_session.commit()
    return created


@pytest_asyncio.fixture
async def sample_quiz(test_db_session):
    """문제 3개(정답 A, B, C)가 있는 대기 상태 퀴즈"""
    quiz = Quiz(title="수학 경시 예선", duration_minutes=30, join_code="A1B2C3", status=QuizStatus.WAITING.value)
    test_db_session.add(quiz)
    await test_db_session.commit()

    options = [{"id": key, "text": f"보기 {key}"} for key in ("A", "B", "C", "D")]
    questions = [
        Question(quiz_id=quiz.id, number=number, text=f"$x^{number}$ 의 값은?", options=options, correct_option_id=key)
        for number, key in ((2, "B"), (1, "A"), (3, "C"))
    ]
    test_db_session.add_all(questions)
    await test_db_session.commit()
    return quiz


@pytest.fixture
def admin_headers(admin_team):
    return {"X-Team-Id": str(admin_team.id)}
