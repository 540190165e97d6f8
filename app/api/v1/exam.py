from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import Identity, get_current_identity
from app.models.base import get_db
from app.schemas import exam as exam_schema
from app.services import exam_service

router = APIRouter(prefix="/exam", tags=["exam"])


@router.post("/join/{quiz_ref}", response_model=exam_schema.SubmissionResponse)
async def join_lobby(
    quiz_ref: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """대기실 입장 API (참여 코드 또는 퀴즈 ID)"""
    return await exam_service.join_lobby(db, quiz_ref, identity.participant_id)


@router.get("/status/{quiz_ref}", response_model=exam_schema.ExamStatusResponse)
async def check_status(
    quiz_ref: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 상태 폴링 API"""
    return await exam_service.check_status(db, quiz_ref)


@router.post("/start/{quiz_ref}", response_model=exam_schema.ExamStartResponse)
async def start_exam(
    quiz_ref: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """시험 시작/재개 API"""
    return await exam_service.start_or_resume(db, quiz_ref, identity.participant_id)


@router.put("/save-answers/{submission_id}", response_model=exam_schema.SubmissionResponse)
async def save_answers(
    submission_id: int,
    request: exam_schema.ExamAnswersRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """답안 자동 저장 API"""
    return await exam_service.save_answers(db, submission_id, identity.participant_id, request.answers)


@router.post("/submit/{submission_id}", response_model=exam_schema.ExamSubmitResponse)
async def submit_exam(
    submission_id: int,
    request: exam_schema.ExamAnswersRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """답안 제출 API"""
    return await exam_service.submit(db, submission_id, identity.participant_id, request.answers)


@router.post("/violation/{submission_id}", response_model=exam_schema.SubmissionResponse)
async def record_violation(
    submission_id: int,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """화면 이탈 기록 API"""
    return await exam_service.record_violation(db, submission_id, identity.participant_id)


@router.get("/leaderboard/{quiz_ref}", response_model=exam_schema.LeaderboardResponse)
async def get_leaderboard(
    quiz_ref: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """순위표 조회 API"""
    return await exam_service.get_leaderboard(db, quiz_ref)
