#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""관리자 팀 계정 생성 스크립트 (공개 등록 API로는 관리자를 만들 수 없음)"""
import asyncio
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)

from app.exceptions import InvalidRequestError
from app.models.base import get_async_session_maker
from app.models.team import TeamRole
from app.schemas.team import TeamCreateRequest
from app.services.team_service import register_team


async def create_admin(email: str, name: str, school: str):
    session_maker = get_async_session_maker()
    async with session_maker() as session:
        request = TeamCreateRequest(email=email, team_name=name, leader_name=name, school=school)
        try:
            team = await register_team(session, request, role=TeamRole.ADMIN)
        except InvalidRequestError as e:
            print(f"[WARN] {e.message}")
            return
        print(f"[OK] 관리자 생성 완료: id={team.id}, email={team.email}")
        print(f"[INFO] 인증 게이트웨이에서 X-Team-Id: {team.id} 로 전달하도록 설정하세요")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="관리자 계정 생성")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="admin")
    parser.add_argument("--school", default="운영본부")

    args = parser.parse_args()

    asyncio.run(create_admin(args.email, args.name, args.school))
