"""시험 진행 API 통합 테스트 (인메모리 SQLite)"""
from datetime import timedelta

import pytest

from app.crud import submission as submission_crud
from app.models.base import utcnow
from app.models.quiz import Quiz, QuizStatus
from app.models.submission import Submission, SubmissionStatus
from app.services import exam_service

# sample_quiz 문제 ID별 정답 (ID 1: 2번 문제, ID 2: 1번 문제, ID 3: 3번 문제)
ANSWER_KEY = {"1": "B", "2": "A", "3": "C"}


def team_headers(team):
    return {"X-Team-Id": str(team.id)}


async def fetch_submission(session, submission_id: int) -> Submission:
    return await session.get(Submission, submission_id, populate_existing=True)


async def open_quiz(client, quiz, admin_headers):
    response = await client.put(
        f"/api/v1/quizzes/{quiz.id}/status",
        json={"status": "active"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_exam_flow_join_start_save_submit(client, test_db_session, sample_quiz, teams, admin_headers):
    """대기실 입장 → 시작 → 자동 저장 → 제출 → 순위표"""
    team = teams[0]
    headers = team_headers(team)

    join = await client.post("/api/v1/exam/join/a1b2c3", headers=headers)
    assert join.status_code == 200
    assert join.json()["status"] == "pending"
    submission_id = join.json()["id"]

    not_open = await client.post("/api/v1/exam/start/A1B2C3", headers=headers)
    assert not_open.status_code == 403

    await open_quiz(client, sample_quiz, admin_headers)

    start = await client.post("/api/v1/exam/start/A1B2C3", headers=headers)
    assert start.status_code == 200
    body = start.json()
    assert body["submission"]["id"] == submission_id
    assert body["submission"]["status"] == "active"
    assert [q["number"] for q in body["questions"]] == [1, 2, 3]
    assert all("correct_option_id" not in q for q in body["questions"])

    saved = await client.put(
        f"/api/v1/exam/save-answers/{submission_id}",
        json={"answers": {"1": "B", "2": "C"}},
        headers=headers,
    )
    assert saved.status_code == 200
    assert saved.json()["answers"] == {"1": "B", "2": "C"}
    assert saved.json()["score"] == 0

    submitted = await client.post(
        f"/api/v1/exam/submit/{submission_id}",
        json={"answers": {"1": "B", "2": "A", "3": "D"}},
        headers=headers,
    )
    assert submitted.status_code == 200
    result = submitted.json()["result"]
    assert submitted.json()["already_completed"] is False
    assert result["status"] == "completed"
    assert result["score"] == 2
    assert result["duration_ms"] >= 0

    again = await client.post(
        f"/api/v1/exam/submit/{submission_id}",
        json={"answers": ANSWER_KEY},
        headers=headers,
    )
    assert again.status_code == 200
    assert again.json()["already_completed"] is True
    assert again.json()["result"]["score"] == 2

    leaderboard = await client.get(f"/api/v1/exam/leaderboard/{sample_quiz.id}", headers=headers)
    assert leaderboard.status_code == 200
    entries = leaderboard.json()["entries"]
    assert len(entries) == 1
    assert entries[0]["team_name"] == team.team_name
    assert entries[0]["rank"] == 1


@pytest.mark.asyncio
async def test_join_twice_returns_same_submission(client, sample_quiz, teams):
    headers = team_headers(teams[0])

    first = await client.post("/api/v1/exam/join/A1B2C3", headers=headers)
    second = await client.post(f"/api/v1/exam/join/{sample_quiz.id}", headers=headers)

    assert first.status_code == second.status_code == 200
    assert first.json()["id"] == second.json()["id"]
    assert first.json()["start_time"] == second.json()["start_time"]


@pytest.mark.asyncio
async def test_join_unknown_quiz_returns_404(client, sample_quiz, teams):
    response = await client.post("/api/v1/exam/join/ZZZZZZ", headers=team_headers(teams[0]))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_exam_requires_identity(client, sample_quiz):
    missing = await client.post("/api/v1/exam/join/A1B2C3")
    unknown = await client.post("/api/v1/exam/join/A1B2C3", headers={"X-Team-Id": "9999"})

    assert missing.status_code == 401
    assert unknown.status_code == 401


@pytest.mark.asyncio
async def test_other_team_cannot_touch_submission(client, sample_quiz, teams, admin_headers):
    await open_quiz(client, sample_quiz, admin_headers)
    start = await client.post("/api/v1/exam/start/A1B2C3", headers=team_headers(teams[0]))
    submission_id = start.json()["submission"]["id"]

    save = await client.put(
        f"/api/v1/exam/save-answers/{submission_id}",
        json={"answers": {"1": "A"}},
        headers=team_headers(teams[1]),
    )
    submit = await client.post(
        f"/api/v1/exam/submit/{submission_id}",
        json={"answers": {"1": "A"}},
        headers=team_headers(teams[1]),
    )

    assert save.status_code == 403
    assert submit.status_code == 403


@pytest.mark.asyncio
async def test_save_answers_rejects_unknown_option(client, sample_quiz, teams, admin_headers):
    await open_quiz(client, sample_quiz, admin_headers)
    headers = team_headers(teams[0])
    start = await client.post("/api/v1/exam/start/A1B2C3", headers=headers)
    submission_id = start.json()["submission"]["id"]

    response = await client.put(
        f"/api/v1/exam/save-answers/{submission_id}",
        json={"answers": {"1": "Z"}},
        headers=headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_submit_while_pending_is_forbidden(client, sample_quiz, teams):
    headers = team_headers(teams[0])
    join = await client.post("/api/v1/exam/join/A1B2C3", headers=headers)

    response = await client.post(
        f"/api/v1/exam/submit/{join.json()['id']}",
        json={"answers": {"1": "B"}},
        headers=headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_submit_unknown_submission_returns_404(client, sample_quiz, teams):
    response = await client.post(
        "/api/v1/exam/submit/9999",
        json={"answers": {}},
        headers=team_headers(teams[0]),
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_status_polling_does_not_expire_submission(client, test_db_session, sample_quiz, teams):
    """상태 조회는 읽기 전용, 마감이 지난 active 기록도 그대로 유지"""
    sample_quiz.status = QuizStatus.ACTIVE.value
    now = utcnow()
    submission = Submission(
        quiz_id=sample_quiz.id,
        team_id=teams[0].id,
        start_time=now - timedelta(minutes=40),
        end_time=now - timedelta(minutes=10),
        answers={"1": "B"},
        status=SubmissionStatus.ACTIVE.value,
    )
    test_db_session.add(submission)
    await test_db_session.commit()

    response = await client.get("/api/v1/exam/status/A1B2C3", headers=team_headers(teams[0]))

    assert response.status_code == 200
    assert response.json()["status"] == "active"
    assert response.json()["participant_count"] == 1
    stored = await fetch_submission(test_db_session, submission.id)
    assert stored.status == "active"


@pytest.mark.asyncio
async def test_resume_after_deadline_finalizes_with_stored_answers(client, test_db_session, sample_quiz, teams):
    sample_quiz.status = QuizStatus.ACTIVE.value
    now = utcnow()
    submission = Submission(
        quiz_id=sample_quiz.id,
        team_id=teams[0].id,
        start_time=now - timedelta(minutes=40),
        end_time=now - timedelta(minutes=10),
        answers={"1": "B", "2": "A"},
        status=SubmissionStatus.ACTIVE.value,
    )
    test_db_session.add(submission)
    await test_db_session.commit()

    response = await client.post("/api/v1/exam/start/A1B2C3", headers=team_headers(teams[0]))

    assert response.status_code == 403
    stored = await fetch_submission(test_db_session, submission.id)
    assert stored.status == "completed"
    assert stored.score == 2
    assert stored.submitted_at is not None


@pytest.mark.asyncio
async def test_close_quiz_auto_submits_open_sessions(client, test_db_session, sample_quiz, teams, admin_headers):
    """관리자 종료 시 진행 중/대기 기록 모두 저장된 답안으로 채점"""
    await open_quiz(client, sample_quiz, admin_headers)

    start = await client.post("/api/v1/exam/start/A1B2C3", headers=team_headers(teams[0]))
    started_id = start.json()["submission"]["id"]
    await client.put(
        f"/api/v1/exam/save-answers/{started_id}",
        json={"answers": {"1": "B", "2": "A", "3": "C"}},
        headers=team_headers(teams[0]),
    )
    waiting = await client.post("/api/v1/exam/join/A1B2C3", headers=team_headers(teams[1]))
    waiting_id = waiting.json()["id"]

    response = await client.put(
        f"/api/v1/quizzes/{sample_quiz.id}/status",
        json={"status": "closed"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["quiz"]["status"] == "closed"
    assert response.json()["auto_submitted"] == 2

    started = await fetch_submission(test_db_session, started_id)
    joined = await fetch_submission(test_db_session, waiting_id)
    assert (started.status, started.score) == ("completed", 3)
    assert (joined.status, joined.score) == ("completed", 0)
    assert started.submitted_at == joined.submitted_at

    reopen = await client.put(
        f"/api/v1/quizzes/{sample_quiz.id}/status",
        json={"status": "active"},
        headers=admin_headers,
    )
    assert reopen.status_code == 400


@pytest.mark.asyncio
async def test_late_submission_after_auto_submit_rescores_empty(client, sample_quiz, teams, admin_headers):
    """답안 없이 자동 제출된 기록은 이후 제출된 답안으로 다시 채점"""
    await open_quiz(client, sample_quiz, admin_headers)
    headers = team_headers(teams[0])
    start = await client.post("/api/v1/exam/start/A1B2C3", headers=headers)
    submission_id = start.json()["submission"]["id"]
    await client.put(f"/api/v1/quizzes/{sample_quiz.id}/status", json={"status": "closed"}, headers=admin_headers)

    response = await client.post(
        f"/api/v1/exam/submit/{submission_id}",
        json={"answers": {"1": "B"}},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["already_completed"] is False
    assert response.json()["result"]["score"] == 1


@pytest.mark.asyncio
async def test_reset_quiz_allows_fresh_join(client, test_db_session, sample_quiz, teams, admin_headers):
    await open_quiz(client, sample_quiz, admin_headers)
    headers = team_headers(teams[0])
    start = await client.post("/api/v1/exam/start/A1B2C3", headers=headers)
    old_id = start.json()["submission"]["id"]
    await client.put(f"/api/v1/quizzes/{sample_quiz.id}/status", json={"status": "closed"}, headers=admin_headers)

    reset = await client.put(f"/api/v1/quizzes/{sample_quiz.id}/reset", headers=admin_headers)

    assert reset.status_code == 200
    assert reset.json()["deleted_submissions"] == 1
    assert reset.json()["quiz"]["status"] == "waiting"
    assert await fetch_submission(test_db_session, old_id) is None

    join = await client.post("/api/v1/exam/join/A1B2C3", headers=headers)
    assert join.status_code == 200
    assert join.json()["status"] == "pending"
    assert join.json()["answers"] == {}


@pytest.mark.asyncio
async def test_leaderboard_orders_by_score_then_duration(client, test_db_session, sample_quiz, teams):
    now = utcnow()
    for team, score, duration_ms in ((teams[0], 5, 100), (teams[1], 5, 50), (teams[2], 3, 10)):
        test_db_session.add(
            Submission(
                quiz_id=sample_quiz.id,
                team_id=team.id,
                start_time=now,
                end_time=now + timedelta(minutes=30),
                answers={},
                status=SubmissionStatus.COMPLETED.value,
                submitted_at=now,
                score=score,
                duration_ms=duration_ms,
            )
        )
    await test_db_session.commit()

    response = await client.get("/api/v1/exam/leaderboard/A1B2C3", headers=team_headers(teams[0]))

    assert response.status_code == 200
    entries = response.json()["entries"]
    assert [e["team_name"] for e in entries] == [teams[1].team_name, teams[0].team_name, teams[2].team_name]
    assert [e["rank"] for e in entries] == [1, 2, 3]
    assert entries[0]["school"] == teams[1].school


@pytest.mark.asyncio
async def test_leaderboard_excludes_unfinished(client, sample_quiz, teams, admin_headers):
    await open_quiz(client, sample_quiz, admin_headers)
    await client.post("/api/v1/exam/start/A1B2C3", headers=team_headers(teams[0]))

    response = await client.get("/api/v1/exam/leaderboard/A1B2C3", headers=team_headers(teams[0]))

    assert response.json()["entries"] == []


@pytest.mark.asyncio
async def test_record_violation_increments_count(client, sample_quiz, teams, admin_headers):
    await open_quiz(client, sample_quiz, admin_headers)
    headers = team_headers(teams[0])
    start = await client.post("/api/v1/exam/start/A1B2C3", headers=headers)
    submission_id = start.json()["submission"]["id"]

    await client.post(f"/api/v1/exam/violation/{submission_id}", headers=headers)
    response = await client.post(f"/api/v1/exam/violation/{submission_id}", headers=headers)

    assert response.status_code == 200
    assert response.json()["violation_count"] == 2


@pytest.mark.asyncio
async def test_concurrent_create_returns_existing_row(test_session_maker, sample_quiz, teams):
    """다른 세션이 먼저 기록을 만든 경우 충돌 대신 그 기록을 반환"""
    now = utcnow()
    async with test_session_maker() as first, test_session_maker() as second:
        winner = await submission_crud.create_submission(
            first,
            quiz_id=sample_quiz.id,
            team_id=teams[0].id,
            start_time=now,
            end_time=now + timedelta(minutes=30),
            status=SubmissionStatus.PENDING,
        )
        quiz = await second.get(Quiz, sample_quiz.id)

        submission, created = await exam_service._create_or_fetch_submission(
            second, quiz, teams[0].id, SubmissionStatus.ACTIVE, now
        )

    assert created is False
    assert submission.id == winner.id
    assert submission.status == "pending"


@pytest.mark.asyncio
async def test_save_answers_after_deadline_is_rejected(client, test_db_session, sample_quiz, teams, admin_headers):
    """마감 후 자동 저장한 답안은 점수에 반영되지 않음"""
    sample_quiz.status = QuizStatus.ACTIVE.value
    now = utcnow()
    submission = Submission(
        quiz_id=sample_quiz.id,
        team_id=teams[0].id,
        start_time=now - timedelta(minutes=40),
        end_time=now - timedelta(minutes=10),
        answers={},
        status=SubmissionStatus.ACTIVE.value,
    )
    test_db_session.add(submission)
    await test_db_session.commit()

    save = await client.put(
        f"/api/v1/exam/save-answers/{submission.id}",
        json={"answers": ANSWER_KEY},
        headers=team_headers(teams[0]),
    )
    assert save.status_code == 403

    stored = await fetch_submission(test_db_session, submission.id)
    assert (stored.status, stored.score, stored.answers) == ("completed", 0, {})

    close = await client.put(
        f"/api/v1/quizzes/{sample_quiz.id}/status",
        json={"status": "closed"},
        headers=admin_headers,
    )
    assert close.json()["auto_submitted"] == 0

    leaderboard = await client.get("/api/v1/exam/leaderboard/A1B2C3", headers=team_headers(teams[0]))
    assert [e["score"] for e in leaderboard.json()["entries"]] == [0]


@pytest.mark.asyncio
async def test_join_closed_quiz_is_rejected(client, test_db_session, sample_quiz, teams, admin_headers):
    await client.post("/api/v1/exam/join/A1B2C3", headers=team_headers(teams[0]))
    await client.put(f"/api/v1/quizzes/{sample_quiz.id}/status", json={"status": "closed"}, headers=admin_headers)

    late_join = await client.post("/api/v1/exam/join/A1B2C3", headers=team_headers(teams[1]))
    existing = await client.post("/api/v1/exam/join/A1B2C3", headers=team_headers(teams[0]))
    status = await client.get("/api/v1/exam/status/A1B2C3", headers=team_headers(teams[0]))

    assert late_join.status_code == 403
    assert existing.status_code == 200
    assert existing.json()["status"] == "completed"
    assert status.json()["participant_count"] == 1
