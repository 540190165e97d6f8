"""채점 및 제출 확정 로직

모든 함수는 입력(답안, 정답표, 시각)만으로 결과가 결정되는 순수 함수이다.
같은 입력이면 항상 같은 점수/소요 시간이 나와야 한다.
"""
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta

from app.exceptions import InvalidAnswerError
from app.models.question import Question
from app.models.submission import Submission, SubmissionStatus


def parse_answers(raw: Mapping | None) -> dict[int, str]:
    """저장된 답안(JSON, 문자열 키)을 문제 ID(int) 키로 변환"""
    if not raw:
        return {}
    return {int(question_id): option_id for question_id, option_id in raw.items()}


def serialize_answers(answers: Mapping[int, str]) -> dict[str, str]:
    """답안을 JSON 저장용(문자열 키, 정렬)으로 변환"""
    return {str(question_id): answers[question_id] for question_id in sorted(answers)}


def validate_answers(answers: Mapping[int, str], questions: Iterable[Question]) -> None:
    """답안이 퀴즈의 문제/선택지 집합에 속하는지 검증"""
    options_by_question = {question.id: question.option_ids for question in questions}
    for question_id, option_id in answers.items():
        if question_id not in options_by_question:
            raise InvalidAnswerError(f"퀴즈에 없는 문제입니다: {question_id}")
        if option_id not in options_by_question[question_id]:
            raise InvalidAnswerError(f"문제 {question_id}에 없는 선택지입니다: {option_id}")


def calculate_score(answers: Mapping[int, str], answer_key: Mapping[int, str]) -> int:
    """정답과 일치하는 문제 수 (미응답/오답은 0점)"""
    return sum(
        1
        for question_id, correct_option_id in answer_key.items()
        if answers.get(question_id) == correct_option_id
    )


def calculate_duration_ms(start_time: datetime, submitted_at: datetime) -> int:
    """소요 시간 (ms, 음수는 0으로 보정)"""
    return max(0, (submitted_at - start_time) // timedelta(milliseconds=1))


def finalize_submission(
    submission: Submission,
    answers: Mapping[int, str],
    answer_key: Mapping[int, str],
    submitted_at: datetime,
) -> Submission:
    """답안을 채점하고 제출 기록을 완료 상태로 변경 (커밋은 호출 측)"""
    submission.answers = serialize_answers(answers)
    submission.score = calculate_score(answers, answer_key)
    submission.duration_ms = calculate_duration_ms(submission.start_time, submitted_at)
    submission.submitted_at = submitted_at
    submission.status = SubmissionStatus.COMPLETED.value
    return submission
