import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.crud import question as question_crud, quiz as quiz_crud, submission as submission_crud
from app.exceptions import (
    ExamForbiddenError,
    InvalidRequestError,
    QuizNotFoundError,
    SubmissionNotFoundError,
)
from app.models.base import utcnow
from app.models.quiz import Quiz, QuizStatus
from app.models.submission import Submission, SubmissionStatus
from app.schemas import exam as exam_schema, question as question_schema, quiz as quiz_schema
from app.services import quiz_service, scoring

logger = logging.getLogger(__name__)


def _submit_tolerance() -> timedelta:
    return timedelta(seconds=settings.submit_tolerance_seconds)


def _exam_window(quiz: Quiz, now: datetime) -> tuple[datetime, datetime]:
    return now, now + timedelta(minutes=quiz.duration_minutes)


async def _create_or_fetch_submission(
    session: AsyncSession,
    quiz: Quiz,
    participant_id: int,
    status: SubmissionStatus,
    now: datetime,
) -> tuple[Submission, bool]:
    """제출 기록 생성, 동시 생성 충돌 시 먼저 생성된 기록 반환

    Returns:
        (제출 기록, 이번 요청에서 생성했는지 여부)
    """
    quiz_id = quiz.id
    start_time, end_time = _exam_window(quiz, now)
    try:
        submission = await submission_crud.create_submission(
            session,
            quiz_id=quiz_id,
            team_id=participant_id,
            start_time=start_time,
            end_time=end_time,
            status=status,
        )
        return submission, True
    except IntegrityError:
        await session.rollback()
        existing = await submission_crud.get_submission_by_quiz_and_team(session, quiz_id, participant_id)
        if existing is None:
            # 유니크 충돌이 아닌 무결성 오류 (예: 존재하지 않는 팀)
            raise
        logger.info(
            f"제출 기록 동시 생성 충돌, 기존 기록 사용: quiz_id={quiz_id}, "
            f"team_id={participant_id}, submission_id={existing.id}"
        )
        return existing, False


async def _get_owned_submission(
    session: AsyncSession,
    submission_id: int,
    participant_id: int,
) -> Submission:
    submission = await submission_crud.get_submission_by_id(session, submission_id)
    if not submission:
        raise SubmissionNotFoundError(submission_id)
    if submission.team_id != participant_id:
        raise ExamForbiddenError("다른 팀의 시험 세션에는 접근할 수 없습니다")
    return submission


async def join_lobby(
    session: AsyncSession,
    quiz_ref: int | str,
    participant_id: int,
    now: datetime | None = None,
) -> exam_schema.SubmissionResponse:
    """대기실 입장

    제출 기록이 없으면 pending 상태로 생성한다. 시작/종료 시각은 임시값이며
    실제 시험 시작 시 다시 계산된다. 이미 있으면 그대로 반환한다.
    종료된 퀴즈에는 새로 입장할 수 없다.
    """
    now = now or utcnow()
    # 퀴즈 종료(일괄 자동 제출)와 새 기록 생성을 직렬화
    quiz = await quiz_service.resolve_quiz(session, quiz_ref, for_update=True, read=True)

    submission = await submission_crud.get_submission_by_quiz_and_team(session, quiz.id, participant_id)
    if submission is None:
        if quiz.status == QuizStatus.CLOSED:
            raise ExamForbiddenError("이미 종료된 시험입니다")
        submission, created = await _create_or_fetch_submission(
            session, quiz, participant_id, SubmissionStatus.PENDING, now
        )
        if created:
            logger.info(f"대기실 입장: quiz_id={submission.quiz_id}, team_id={participant_id}")

    return exam_schema.SubmissionResponse.model_validate(submission)


async def _expire_submission(
    session: AsyncSession,
    submission: Submission,
    now: datetime,
) -> None:
    """마감이 지난 active 기록을 저장된 답안으로 채점하여 종료"""
    answer_key = await question_crud.get_answer_key(session, submission.quiz_id)
    scoring.finalize_submission(submission, scoring.parse_answers(submission.answers), answer_key, now)
    await submission_crud.save_submission(session, submission)
    logger.info(
        f"시간 만료로 시험 종료: submission_id={submission.id}, score={submission.score}"
    )


async def _ensure_before_deadline(
    session: AsyncSession,
    submission: Submission,
    now: datetime,
) -> None:
    """허용 오차를 넘겨 마감이 지난 active 기록은 종료 처리 후 거부"""
    if now - submission.end_time > _submit_tolerance():
        await _expire_submission(session, submission, now)
        raise ExamForbiddenError("시험 시간이 만료되었습니다")


async def _resume_submission(
    session: AsyncSession,
    quiz: Quiz,
    submission: Submission,
    now: datetime,
) -> Submission:
    """기존 제출 기록 상태에 따라 시험 재개 또는 거부"""
    if submission.status == SubmissionStatus.COMPLETED:
        raise ExamForbiddenError("이미 시험을 마쳤습니다")

    if submission.status == SubmissionStatus.ACTIVE:
        if now > submission.end_time:
            await _expire_submission(session, submission, now)
            raise ExamForbiddenError("시험 시간이 만료되었습니다")
        return submission

    # pending: 대기 시간은 시험 시간에 포함하지 않음
    if quiz.status != QuizStatus.ACTIVE:
        raise ExamForbiddenError("시험이 아직 시작되지 않았습니다")
    submission.status = SubmissionStatus.ACTIVE.value
    submission.start_time, submission.end_time = _exam_window(quiz, now)
    submission = await submission_crud.save_submission(session, submission)
    logger.info(f"시험 시작: submission_id={submission.id}, end_time={submission.end_time.isoformat()}")
    return submission


async def start_or_resume(
    session: AsyncSession,
    quiz_ref: int | str,
    participant_id: int,
    now: datetime | None = None,
) -> exam_schema.ExamStartResponse:
    """시험 시작 또는 재개

    정답 필드를 제외한 문제 목록(문제 번호순)과 제출 기록을 반환한다.
    """
    now = now or utcnow()
    quiz = await quiz_service.resolve_quiz(session, quiz_ref, for_update=True, read=True)
    quiz_id = quiz.id

    submission = await submission_crud.get_submission_by_quiz_and_team(session, quiz_id, participant_id)
    if submission is None:
        if quiz.status != QuizStatus.ACTIVE:
            raise ExamForbiddenError("시험이 아직 시작되지 않았습니다")
        submission, created = await _create_or_fetch_submission(
            session, quiz, participant_id, SubmissionStatus.ACTIVE, now
        )
        if created:
            logger.info(f"시험 시작: submission_id={submission.id}, team_id={participant_id}")
        else:
            # 충돌 후 rollback으로 만료된 퀴즈 상태를 다시 읽음
            quiz = await quiz_crud.get_quiz_by_id(session, quiz_id, for_update=True, read=True)
            if quiz is None:
                raise QuizNotFoundError(quiz_id)
            submission = await _resume_submission(session, quiz, submission, now)
    else:
        submission = await _resume_submission(session, quiz, submission, now)

    questions = await question_crud.get_questions_by_quiz_id(session, quiz_id)
    return exam_schema.ExamStartResponse(
        submission=exam_schema.SubmissionResponse.model_validate(submission),
        questions=[question_schema.QuestionPublicResponse.model_validate(q) for q in questions],
    )


async def save_answers(
    session: AsyncSession,
    submission_id: int,
    participant_id: int,
    answers: exam_schema.AnswerMap,
    now: datetime | None = None,
) -> exam_schema.SubmissionResponse:
    """답안 자동 저장 (채점하지 않음, 마지막 저장 우선)

    마감이 지난 뒤의 저장은 반영하지 않고, 기존 답안으로 시험을 종료한다.
    """
    now = now or utcnow()
    submission = await _get_owned_submission(session, submission_id, participant_id)
    if submission.status != SubmissionStatus.ACTIVE:
        raise ExamForbiddenError("시험 세션이 종료되었습니다")
    await _ensure_before_deadline(session, submission, now)

    questions = await question_crud.get_questions_by_quiz_id(session, submission.quiz_id)
    scoring.validate_answers(answers, questions)

    stored = scoring.serialize_answers(answers)
    if stored != submission.answers:
        submission.answers = stored
        submission = await submission_crud.save_submission(session, submission)
        logger.debug(f"답안 저장: submission_id={submission_id}, answered={len(stored)}")

    return exam_schema.SubmissionResponse.model_validate(submission)


async def submit(
    session: AsyncSession,
    submission_id: int,
    participant_id: int,
    answers: exam_schema.AnswerMap,
    now: datetime | None = None,
) -> exam_schema.ExamSubmitResponse:
    """답안 제출 및 채점

    이미 완료된 기록은 점수를 바꾸지 않고 그대로 반환한다. 단, 일괄 자동 제출로
    답안 없이 완료된 기록에 답안이 들어오면 해당 답안으로 다시 채점한다.
    """
    now = now or utcnow()
    submission = await _get_owned_submission(session, submission_id, participant_id)

    if submission.status == SubmissionStatus.COMPLETED:
        if submission.answers or not answers:
            return exam_schema.ExamSubmitResponse(
                message="이미 제출된 시험입니다",
                already_completed=True,
                result=exam_schema.SubmissionResponse.model_validate(submission),
            )
        logger.warning(f"답안 없이 종료된 기록에 늦은 답안 반영: submission_id={submission_id}")
    elif submission.status == SubmissionStatus.PENDING:
        raise ExamForbiddenError("시험이 아직 시작되지 않았습니다")
    elif now - submission.end_time > _submit_tolerance():
        raise ExamForbiddenError("제출 시간이 초과되었습니다")

    questions = await question_crud.get_questions_by_quiz_id(session, submission.quiz_id)
    scoring.validate_answers(answers, questions)
    answer_key = {question.id: question.correct_option_id for question in questions}

    scoring.finalize_submission(submission, answers, answer_key, now)
    submission = await submission_crud.save_submission(session, submission)
    logger.info(
        f"시험 제출: submission_id={submission_id}, score={submission.score}, "
        f"duration_ms={submission.duration_ms}"
    )
    return exam_schema.ExamSubmitResponse(
        message="시험이 제출되었습니다",
        result=exam_schema.SubmissionResponse.model_validate(submission),
    )


async def record_violation(
    session: AsyncSession,
    submission_id: int,
    participant_id: int,
    now: datetime | None = None,
) -> exam_schema.SubmissionResponse:
    """부정행위 의심(화면 이탈 등) 횟수 증가"""
    now = now or utcnow()
    submission = await _get_owned_submission(session, submission_id, participant_id)
    if submission.status != SubmissionStatus.ACTIVE:
        raise ExamForbiddenError("시험 세션이 종료되었습니다")
    await _ensure_before_deadline(session, submission, now)

    submission.violation_count += 1
    submission = await submission_crud.save_submission(session, submission)
    logger.info(f"화면 이탈 기록: submission_id={submission_id}, count={submission.violation_count}")
    return exam_schema.SubmissionResponse.model_validate(submission)


async def check_status(session: AsyncSession, quiz_ref: int | str) -> exam_schema.ExamStatusResponse:
    """폴링용 퀴즈 상태 조회 (읽기 전용)"""
    quiz = await quiz_service.resolve_quiz(session, quiz_ref)
    participant_count = await submission_crud.count_participants(session, quiz.id)
    return exam_schema.ExamStatusResponse(
        quiz_id=quiz.id,
        title=quiz.title,
        status=quiz.status,
        duration_minutes=quiz.duration_minutes,
        participant_count=participant_count,
    )


async def auto_submit_all(
    session: AsyncSession,
    quiz_id: int,
    now: datetime | None = None,
) -> int:
    """pending/active 기록을 저장된 답안으로 일괄 채점 및 종료

    모든 기록에 같은 제출 시각을 사용한다. 완료된 기록은 대상이 아니므로
    재실행해도 결과가 바뀌지 않는다. flush만 하며 커밋은 호출 측에서
    퀴즈 상태 변경과 함께 한 번에 한다.

    Returns:
        종료 처리한 기록 수
    """
    now = now or utcnow()
    submissions = await submission_crud.get_open_submissions_by_quiz(session, quiz_id)
    if not submissions:
        return 0

    answer_key = await question_crud.get_answer_key(session, quiz_id)
    for submission in submissions:
        scoring.finalize_submission(submission, scoring.parse_answers(submission.answers), answer_key, now)
    await session.flush()

    logger.info(f"일괄 자동 제출: quiz_id={quiz_id}, count={len(submissions)}")
    return len(submissions)


async def set_quiz_status(
    session: AsyncSession,
    quiz_id: int,
    new_status: QuizStatus,
    now: datetime | None = None,
) -> quiz_schema.QuizStatusChangeResponse:
    """관리자 퀴즈 상태 변경

    종료(closed) 시에는 진행 중인 기록을 모두 자동 제출한 뒤 상태를 저장한다.
    퀴즈 행을 잠근 채 자동 제출과 상태 변경을 하나의 트랜잭션으로 커밋하므로
    그 사이에 새 기록이 시작될 수 없다.
    """
    quiz = await quiz_service.get_quiz_or_404(session, quiz_id, for_update=True)
    auto_submitted = 0

    if new_status == QuizStatus.ACTIVE:
        if quiz.status == QuizStatus.CLOSED:
            raise InvalidRequestError("종료된 퀴즈는 초기화 후 다시 시작할 수 있습니다")
    elif new_status == QuizStatus.CLOSED:
        auto_submitted = await auto_submit_all(session, quiz_id, now)
    else:
        raise InvalidRequestError("대기 상태로 되돌리려면 초기화를 사용하세요")

    quiz = await quiz_crud.update_quiz_status(session, quiz, new_status)
    logger.info(f"퀴즈 상태 변경: quiz_id={quiz_id}, status={quiz.status}, auto_submitted={auto_submitted}")
    return quiz_schema.QuizStatusChangeResponse(
        quiz=quiz_schema.QuizResponse.model_validate(quiz),
        auto_submitted=auto_submitted,
    )


async def reset_quiz(session: AsyncSession, quiz_id: int) -> quiz_schema.QuizResetResponse:
    """퀴즈 초기화 (모든 제출 기록 삭제, 대기 상태로 복귀, 되돌릴 수 없음)"""
    quiz = await quiz_service.get_quiz_or_404(session, quiz_id)
    deleted = await submission_crud.delete_submissions_by_quiz(session, quiz_id)
    quiz = await quiz_crud.update_quiz_status(session, quiz, QuizStatus.WAITING)
    logger.warning(f"퀴즈 초기화: quiz_id={quiz_id}, deleted_submissions={deleted}")
    return quiz_schema.QuizResetResponse(
        quiz=quiz_schema.QuizResponse.model_validate(quiz),
        deleted_submissions=deleted,
    )


async def get_leaderboard(session: AsyncSession, quiz_ref: int | str) -> exam_schema.LeaderboardResponse:
    """순위표 (점수 내림차순, 동점 시 소요 시간 오름차순, 상위 N개)"""
    quiz = await quiz_service.resolve_quiz(session, quiz_ref)
    submissions = await submission_crud.get_completed_submissions_ranked(
        session, quiz.id, settings.leaderboard_limit
    )
    entries = [
        exam_schema.LeaderboardEntry(
            rank=rank,
            submission_id=submission.id,
            team_id=submission.team_id,
            team_name=submission.team.team_name,
            school=submission.team.school,
            score=submission.score,
            duration_ms=submission.duration_ms,
            submitted_at=submission.submitted_at,
        )
        for rank, submission in enumerate(submissions, start=1)
    ]
    return exam_schema.LeaderboardResponse(quiz_id=quiz.id, entries=entries, total=len(entries))


async def list_submissions(session: AsyncSession, quiz_id: int) -> exam_schema.SubmissionListResponse:
    """관리자용 퀴즈 제출 기록 전체 조회"""
    await quiz_service.get_quiz_or_404(session, quiz_id)
    submissions = await submission_crud.get_submissions_by_quiz(session, quiz_id)
    responses = [exam_schema.SubmissionResponse.model_validate(s) for s in submissions]
    return exam_schema.SubmissionListResponse(submissions=responses, total=len(responses))
