#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""서버 담당자로부터 받은 .env 파일 내용으로 로컬 .env 파일 생성"""
import os
from pathlib import Path

# 프로젝트 루트
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"

# 서버 담당자로부터 받은 .env 내용 (로컬 테스트용으로 호스트명 변경)
# 주의: 실제 민감 정보는 서버 담당자로부터 별도로 받아서 수동으로 입력해야 함
env_content = """# Database
# 로컬 테스트용: 호스트명을 localhost로 변경
# 실제 값은 서버 담당자로부터 받아서 수동으로 입력 필요
DATABASE_URL=postgresql+asyncpg://<DB_USER>:<DB_PASSWORD>@localhost:5432/cbt_exam_db

# CORS
ALLOWED_ORIGINS=http://localhost:5173

# Exam
# 마감 이후 제출 허용 오차(초), 순위표 최대 인원
SUBMIT_TOLERANCE_SECONDS=5
LEADERBOARD_LIMIT=50
DEFAULT_QUIZ_DURATION_MINUTES=120

# Environment
# 로컬 개발 시 development로 변경하면 상세 에러 메시지 확인 가능
ENVIRONMENT=development
LOG_DIR=./logs
SQL_ECHO=false
PORT=8001
"""

def create_env_file(overwrite: bool = False):
    """.env 파일 생성 (UTF-8, BOM 없음, LF 줄바꿈)"""
    if env_file.exists():
        if not overwrite:
            print(f"[SKIP] 이미 .env 파일이 있습니다: {env_file} (--overwrite 로 덮어쓰기)")
            return
        backup_file = project_root / ".env.backup"
        backup_file.write_text(env_file.read_text(encoding="utf-8"), encoding="utf-8", newline="\n")
        print(f"[INFO] 기존 .env 파일 백업: {backup_file}")

    env_file.write_text(env_content, encoding="utf-8", newline="\n")
    print(f"[OK] .env 파일 생성 완료: {env_file}")

    if os.name != "nt":
        os.chmod(env_file, 0o600)
        print(f"[INFO] 파일 권한 설정: 600")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="로컬 .env 파일 생성")
    parser.add_argument("--overwrite", action="store_true", help="기존 .env 백업 후 덮어쓰기")
    args = parser.parse_args()

    create_env_file(overwrite=args.overwrite)
