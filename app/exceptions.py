"""커스텀 예외 클래스 정의"""


class BaseAppError(Exception):
    """애플리케이션 기본 예외 클래스"""
    
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class QuizNotFoundError(BaseAppError):
    """퀴즈를 찾을 수 없을 때 발생하는 예외 (404)"""
    
    def __init__(self, quiz_ref: int | str):
        super().__init__(f"퀴즈를 찾을 수 없습니다: {quiz_ref}", status_code=404)


class QuestionNotFoundError(BaseAppError):
    """문제를 찾을 수 없을 때 발생하는 예외 (404)"""
    
    def __init__(self, question_id: int):
        super().__init__(f"문제를 찾을 수 없습니다: {question_id}", status_code=404)


class SubmissionNotFoundError(BaseAppError):
    """시험 세션(제출 기록)을 찾을 수 없을 때 발생하는 예외 (404)"""
    
    def __init__(self, submission_id: int):
        super().__init__(f"시험 세션을 찾을 수 없습니다: {submission_id}", status_code=404)


class TeamNotFoundError(BaseAppError):
    """팀을 찾을 수 없을 때 발생하는 예외 (404)"""
    
    def __init__(self, team_id: int):
        super().__init__(f"팀을 찾을 수 없습니다: {team_id}", status_code=404)


class ExamForbiddenError(BaseAppError):
    """시험 진행이 허용되지 않을 때 발생하는 예외 (403)

    시험 미개시, 이미 종료, 시간 초과, 타 팀 세션 접근 등
    """
    
    def __init__(self, message: str):
        super().__init__(message, status_code=403)


class AdminRequiredError(BaseAppError):
    """관리자 권한이 필요한 요청 (403)"""
    
    def __init__(self, message: str = "관리자 권한이 필요합니다"):
        super().__init__(message, status_code=403)


class UnauthenticatedError(BaseAppError):
    """인증된 팀 정보가 없을 때 발생하는 예외 (401)"""
    
    def __init__(self, message: str = "인증 정보가 없습니다"):
        super().__init__(message, status_code=401)


class InvalidAnswerError(BaseAppError):
    """답안 형식이 잘못되었을 때 발생하는 예외 (400)"""
    
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class InvalidRequestError(BaseAppError):
    """잘못된 요청일 때 발생하는 예외 (400)"""
    
    def __init__(self, message: str):
        super().__init__(message, status_code=400)
