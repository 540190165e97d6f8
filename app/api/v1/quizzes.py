from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.models.base import get_db
from app.models.quiz import QuizStatus
from app.schemas import exam as exam_schema, quiz as quiz_schema
from app.services import exam_service, quiz_service

router = APIRouter(prefix="/quizzes", tags=["quizzes"], dependencies=[Depends(require_admin)])


@router.post("", response_model=quiz_schema.QuizResponse, status_code=status.HTTP_201_CREATED)
async def create_quiz(
    request: quiz_schema.QuizCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 생성 API (관리자)"""
    return await quiz_service.create_quiz(db, request)


@router.get("", response_model=quiz_schema.QuizListResponse)
async def list_quizzes(
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 목록 조회 API (관리자, 최신순)"""
    return await quiz_service.list_quizzes(db)


@router.get("/{quiz_id}", response_model=quiz_schema.QuizResponse)
async def get_quiz(
    quiz_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await quiz_service.get_quiz(db, quiz_id)


@router.put("/{quiz_id}", response_model=quiz_schema.QuizResponse)
async def update_quiz(
    quiz_id: int,
    request: quiz_schema.QuizUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 정보 수정 API (관리자)"""
    return await quiz_service.update_quiz(db, quiz_id, request)


@router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quiz(
    quiz_id: int,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 삭제 API (관리자, 문제/제출 기록 포함)"""
    await quiz_service.delete_quiz(db, quiz_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{quiz_id}/status", response_model=quiz_schema.QuizStatusChangeResponse)
async def update_quiz_status(
    quiz_id: int,
    request: quiz_schema.QuizStatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 시작/종료 API (관리자, 종료 시 일괄 자동 제출)"""
    return await exam_service.set_quiz_status(db, quiz_id, QuizStatus(request.status))


@router.put("/{quiz_id}/reset", response_model=quiz_schema.QuizResetResponse)
async def reset_quiz(
    quiz_id: int,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 초기화 API (관리자, 모든 제출 기록 삭제)"""
    return await exam_service.reset_quiz(db, quiz_id)


@router.get("/{quiz_id}/submissions", response_model=exam_schema.SubmissionListResponse)
async def list_submissions(
    quiz_id: int,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈 제출 기록 조회 API (관리자)"""
    return await exam_service.list_submissions(db, quiz_id)
