import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import question as question_crud, quiz as quiz_crud
from app.exceptions import (
    InvalidRequestError,
    QuestionNotFoundError,
    QuizNotFoundError,
)
from app.models.quiz import JOIN_CODE_LENGTH, Quiz
from app.schemas import question as question_schema, quiz as quiz_schema

logger = logging.getLogger(__name__)

# 참여 코드 충돌 시 재발급 최대 횟수
JOIN_CODE_MAX_ATTEMPTS = 10


async def resolve_quiz(
    session: AsyncSession,
    quiz_ref: int | str,
    for_update: bool = False,
    read: bool = False,
) -> Quiz:
    """참여 코드 또는 ID로 퀴즈 조회

    참여 코드 정확 일치를 먼저 시도하고, 없으면 숫자 ID로 조회한다.
    잠금 옵션은 crud 조회에 그대로 전달된다.
    """
    ref = str(quiz_ref).strip()

    quiz = None
    if len(ref) == JOIN_CODE_LENGTH:
        quiz = await quiz_crud.get_quiz_by_join_code(session, ref, for_update=for_update, read=read)
    if quiz is None and ref.isdigit():
        quiz = await quiz_crud.get_quiz_by_id(session, int(ref), for_update=for_update, read=read)

    if quiz is None:
        raise QuizNotFoundError(ref)
    return quiz


async def get_quiz_or_404(session: AsyncSession, quiz_id: int, for_update: bool = False) -> Quiz:
    quiz = await quiz_crud.get_quiz_by_id(session, quiz_id, for_update=for_update)
    if not quiz:
        raise QuizNotFoundError(quiz_id)
    return quiz


async def _issue_join_code(session: AsyncSession) -> str:
    """사용 중이지 않은 참여 코드 발급"""
    for _ in range(JOIN_CODE_MAX_ATTEMPTS):
        join_code = quiz_crud.generate_join_code()
        if await quiz_crud.get_quiz_by_join_code(session, join_code) is None:
            return join_code
        logger.debug(f"참여 코드 충돌, 재발급: {join_code}")
    raise InvalidRequestError("참여 코드 발급에 실패했습니다. 다시 시도해주세요.")


async def create_quiz(
    session: AsyncSession,
    request: quiz_schema.QuizCreateRequest,
) -> quiz_schema.QuizResponse:
    """퀴즈 생성 (대기 상태, 참여 코드 발급)"""
    join_code = await _issue_join_code(session)
    quiz = await quiz_crud.create_quiz(
        session,
        title=request.title,
        description=request.description,
        duration_minutes=request.duration_minutes,
        join_code=join_code,
    )
    logger.info(f"퀴즈 생성: quiz_id={quiz.id}, join_code={quiz.join_code}")
    return quiz_schema.QuizResponse.model_validate(quiz)


async def list_quizzes(session: AsyncSession) -> quiz_schema.QuizListResponse:
    quizzes = await quiz_crud.get_all_quizzes(session)
    quiz_responses = [quiz_schema.QuizResponse.model_validate(q) for q in quizzes]
    return quiz_schema.QuizListResponse(quizzes=quiz_responses, total=len(quiz_responses))


async def get_quiz(session: AsyncSession, quiz_id: int) -> quiz_schema.QuizResponse:
    quiz = await get_quiz_or_404(session, quiz_id)
    return quiz_schema.QuizResponse.model_validate(quiz)


async def update_quiz(
    session: AsyncSession,
    quiz_id: int,
    request: quiz_schema.QuizUpdateRequest,
) -> quiz_schema.QuizResponse:
    """퀴즈 정보 수정 (참여 코드, 상태 제외)"""
    quiz = await get_quiz_or_404(session, quiz_id)
    quiz = await quiz_crud.update_quiz(
        session,
        quiz,
        title=request.title,
        description=request.description,
        duration_minutes=request.duration_minutes,
    )
    return quiz_schema.QuizResponse.model_validate(quiz)


async def delete_quiz(session: AsyncSession, quiz_id: int) -> None:
    """퀴즈 삭제 (문제, 제출 기록 포함)"""
    quiz = await get_quiz_or_404(session, quiz_id)
    await quiz_crud.delete_quiz(session, quiz)
    logger.info(f"퀴즈 삭제: quiz_id={quiz_id}")


def _validate_options(options: list[question_schema.QuestionOption], correct_option_id: str) -> None:
    """선택지 ID 중복 및 정답 선택지 존재 여부 검증"""
    option_ids = [option.id for option in options]
    if len(set(option_ids)) != len(option_ids):
        raise InvalidRequestError(f"선택지 ID가 중복되었습니다: {option_ids}")
    if correct_option_id not in option_ids:
        raise InvalidRequestError(f"정답 선택지가 선택지 목록에 없습니다: {correct_option_id}")


async def create_question(
    session: AsyncSession,
    request: question_schema.QuestionCreateRequest,
) -> question_schema.QuestionAdminResponse:
    """문제 생성"""
    await get_quiz_or_404(session, request.quiz_id)
    _validate_options(request.options, request.correct_option_id)

    question = await question_crud.create_question(
        session,
        quiz_id=request.quiz_id,
        number=request.number,
        text=request.text,
        options=[option.model_dump() for option in request.options],
        correct_option_id=request.correct_option_id,
        image_url=request.image_url,
        table_html=request.table_html,
    )
    return question_schema.QuestionAdminResponse.model_validate(question)


async def list_questions(session: AsyncSession, quiz_id: int) -> question_schema.QuestionListResponse:
    """관리자용 문제 목록 (정답 포함, 문제 번호순)"""
    await get_quiz_or_404(session, quiz_id)
    questions = await question_crud.get_questions_by_quiz_id(session, quiz_id)
    question_responses = [question_schema.QuestionAdminResponse.model_validate(q) for q in questions]
    return question_schema.QuestionListResponse(questions=question_responses, total=len(question_responses))


async def update_question(
    session: AsyncSession,
    question_id: int,
    request: question_schema.QuestionUpdateRequest,
) -> question_schema.QuestionAdminResponse:
    """문제 수정 (선택지/정답 변경 시 정합성 재검증)"""
    question = await question_crud.get_question_by_id(session, question_id)
    if not question:
        raise QuestionNotFoundError(question_id)

    options = request.options
    if options is None:
        options = [question_schema.QuestionOption(**option) for option in question.options]
    _validate_options(options, request.correct_option_id or question.correct_option_id)

    question = await question_crud.update_question(
        session,
        question,
        number=request.number,
        text=request.text,
        options=[option.model_dump() for option in request.options] if request.options is not None else None,
        correct_option_id=request.correct_option_id,
        image_url=request.image_url,
        table_html=request.table_html,
    )
    return question_schema.QuestionAdminResponse.model_validate(question)


async def delete_question(session: AsyncSession, question_id: int) -> None:
    question = await question_crud.get_question_by_id(session, question_id)
    if not question:
        raise QuestionNotFoundError(question_id)
    await question_crud.delete_question(session, question)
