"""
커스텀 예외 클래스 정의
"""
from typing import Optional


class LexAIError(Exception):
    """기본 예외 클래스"""
    pass


class InvalidInputError(LexAIError):
    """잘못된 입력일 때 발생하는 예외 (네트워크 호출 전에 거부)"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        self.message = message
        super().__init__(f"잘못된 입력: {message}")


class CaseNotFoundError(LexAIError):
    """저장소에 사건이 없을 때 발생하는 예외"""
    def __init__(self, case_id: str):
        self.case_id = case_id
        super().__init__(f"사건을 찾을 수 없습니다: {case_id}")


class GenerationServiceError(LexAIError):
    """답변/요약 생성 서비스 호출 실패 시 발생하는 예외"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(f"생성 서비스 오류: {message}")


class CaseStatusNotFoundError(LexAIError):
    """사건 진행 조회 결과가 없을 때 발생하는 예외"""
    def __init__(self, registry_number: str):
        self.registry_number = registry_number
        super().__init__(f"사건 진행 정보 없음: {registry_number}")


class CaseStatusLookupError(LexAIError):
    """사건 진행 조회 서비스 호출 실패 시 발생하는 예외"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(f"사건 진행 조회 오류: {message}")


class CaseLawSearchError(LexAIError):
    """판례 검색 실패 시 발생하는 예외"""
    def __init__(self, message: str):
        super().__init__(f"판례 검색 오류: {message}")


class StorageError(LexAIError):
    """저장소 쓰기 실패 시 발생하는 예외"""
    def __init__(self, message: str):
        super().__init__(f"저장소 오류: {message}")
