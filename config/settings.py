"""
애플리케이션 설정 관리 모듈
"""
from pydantic_settings import BaseSettings
from typing import List, Optional
from dotenv import load_dotenv

# 환경 변수 로드
load_dotenv(encoding='utf-8')


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # OpenAI (답변/요약 생성 서비스)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    generation_temperature: float = 0.2
    generation_max_tokens: int = 400
    generation_max_retries: int = 3
    generation_retry_delay: float = 1.0

    # 사건 저장소 (소유자별 key-value 저장소)
    storage_url: str = "sqlite:///./data/lex_ai.db"
    storage_namespace: str = "lex-ai-cases"

    # 교차 사건 검색
    retrieval_min_keyword_length: int = 3
    retrieval_min_score: int = 1
    retrieval_max_snippets: int = 2
    retrieval_snippet_chars: int = 200

    # eCourts 사건 진행 조회
    ecourts_api_url: str = "https://apis.akshit.net/eciapi/17/district-court/case"
    ecourts_timeout_seconds: float = 15.0
    lookup_cache_ttl_seconds: Optional[int] = None

    # 판례 키워드 검색 카탈로그
    case_law_catalogue_path: Optional[str] = None

    # API
    api_secret_key: str = "lex-ai-dev-key"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    # Environment
    environment: str = "development"

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> List[str]:
        """CORS Origins를 리스트로 변환"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# 전역 설정 인스턴스
settings = Settings()
