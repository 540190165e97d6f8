from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.models.base import get_db
from app.schemas import question as question_schema
from app.services import quiz_service

router = APIRouter(prefix="/questions", tags=["questions"], dependencies=[Depends(require_admin)])


@router.post("", response_model=question_schema.QuestionAdminResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    request: question_schema.QuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 생성 API (관리자)"""
    return await quiz_service.create_question(db, request)


@router.get("/{quiz_id}", response_model=question_schema.QuestionListResponse)
async def list_questions(
    quiz_id: int,
    db: AsyncSession = Depends(get_db),
):
    """퀴즈별 문제 목록 조회 API (관리자, 정답 포함)"""
    return await quiz_service.list_questions(db, quiz_id)


@router.put("/item/{question_id}", response_model=question_schema.QuestionAdminResponse)
async def update_question(
    question_id: int,
    request: question_schema.QuestionUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 수정 API (관리자)"""
    return await quiz_service.update_question(db, question_id, request)


@router.delete("/item/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: int,
    db: AsyncSession = Depends(get_db),
):
    await quiz_service.delete_question(db, question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
