from app.services.exam_service import (
    auto_submit_all,
    check_status,
    get_leaderboard,
    join_lobby,
    list_submissions,
    record_violation,
    reset_quiz,
    save_answers,
    set_quiz_status,
    start_or_resume,
    submit,
)
from app.services.quiz_service import (
    create_question,
    create_quiz,
    delete_question,
    delete_quiz,
    get_quiz,
    list_questions,
    list_quizzes,
    resolve_quiz,
    update_question,
    update_quiz,
)
from app.services.scoring import (
    calculate_duration_ms,
    calculate_score,
    finalize_submission,
)
from app.services.team_service import (
    delete_team,
    list_teams,
    register_team,
)

__all__ = [
    "join_lobby",
    "start_or_resume",
    "save_answers",
    "submit",
    "record_violation",
    "check_status",
    "auto_submit_all",
    "set_quiz_status",
    "reset_quiz",
    "get_leaderboard",
    "list_submissions",
    "resolve_quiz",
    "create_quiz",
    "list_quizzes",
    "get_quiz",
    "update_quiz",
    "delete_quiz",
    "create_question",
    "list_questions",
    "update_question",
    "delete_question",
    "calculate_score",
    "calculate_duration_ms",
    "finalize_submission",
    "register_team",
    "list_teams",
    "delete_team",
]
