from app.crud.question import (
    create_question,
    delete_question,
    get_answer_key,
    get_question_by_id,
    get_questions_by_quiz_id,
    update_question,
)
from app.crud.quiz import (
    create_quiz,
    delete_quiz,
    generate_join_code,
    get_all_quizzes,
    get_quiz_by_id,
    get_quiz_by_join_code,
    update_quiz,
    update_quiz_status,
)
from app.crud.submission import (
    count_participants,
    create_submission,
    delete_submissions_by_quiz,
    get_completed_submissions_ranked,
    get_open_submissions_by_quiz,
    get_submission_by_id,
    get_submission_by_quiz_and_team,
    get_submissions_by_quiz,
    save_submission,
)
from app.crud.team import (
    create_team,
    delete_team,
    get_participant_teams,
    get_team_by_email_or_name,
    get_team_by_id,
)

__all__ = [
    "get_quiz_by_id",
    "get_quiz_by_join_code",
    "get_all_quizzes",
    "generate_join_code",
    "create_quiz",
    "update_quiz",
    "update_quiz_status",
    "delete_quiz",
    "get_question_by_id",
    "get_questions_by_quiz_id",
    "get_answer_key",
    "create_question",
    "update_question",
    "delete_question",
    "get_submission_by_id",
    "get_submission_by_quiz_and_team",
    "get_submissions_by_quiz",
    "get_open_submissions_by_quiz",
    "get_completed_submissions_ranked",
    "count_participants",
    "create_submission",
    "save_submission",
    "delete_submissions_by_quiz",
    "get_team_by_id",
    "get_team_by_email_or_name",
    "get_participant_teams",
    "create_team",
    "delete_team",
]
