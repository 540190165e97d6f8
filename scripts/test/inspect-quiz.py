#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""퀴즈 상태 및 제출 기록 현황 확인 스크립트 (운영 점검용)"""
import asyncio
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# 환경변수 로드
from dotenv import load_dotenv
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)

from sqlalchemy import func, select, text
from app.exceptions import QuizNotFoundError
from app.models.base import get_engine, get_async_session_maker
from app.models.submission import Submission
from app.services.quiz_service import resolve_quiz


async def inspect_quiz(quiz_ref: str):
    """참여 코드 또는 ID로 퀴즈를 찾아 상태별 제출 기록 수 출력"""
    print(f"\n{'='*60}")
    print(f"퀴즈 점검: {quiz_ref}")
    print(f"{'='*60}\n")

    try:
        engine = get_engine()
        async with engine.begin() as conn:
            result = await conn.execute(text("SELECT 1"))
            print(f"[OK] DB 연결 성공: {result.scalar()}")

        session_maker = get_async_session_maker()
        async with session_maker() as session:
            try:
                quiz = await resolve_quiz(session, quiz_ref)
            except QuizNotFoundError as e:
                print(f"[WARN] {e.message}")
                return

            print(f"[OK] 퀴즈 조회 성공:")
            print(f"  - id: {quiz.id}")
            print(f"  - title: {quiz.title}")
            print(f"  - join_code: {quiz.join_code}")
            print(f"  - status: {quiz.status}")
            print(f"  - duration_minutes: {quiz.duration_minutes}")

            result = await session.execute(
                select(Submission.status, func.count(Submission.id))
                .where(Submission.quiz_id == quiz.id)
                .group_by(Submission.status)
            )
            counts = dict(result.all())
            print(f"\n[제출 기록 상태별 개수]")
            for status in ("pending", "active", "completed"):
                print(f"  - {status}: {counts.get(status, 0)}")

    except Exception as e:
        print(f"\n[ERROR] 에러 발생: {e.__class__.__name__}: {str(e)}")
        import traceback
        traceback.print_exc()
        print(f"\n[INFO] 가능한 원인:")
        print(f"  1. DB 연결 정보가 잘못되었습니다 (.env 파일 확인)")
        print(f"  2. DB 서버가 실행 중이지 않습니다")
        print(f"  3. 마이그레이션이 적용되지 않았습니다 (alembic upgrade head)")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="퀴즈 상태 점검")
    parser.add_argument("quiz_ref", help="참여 코드 또는 퀴즈 ID")

    args = parser.parse_args()

    asyncio.run(inspect_quiz(args.quiz_ref))
