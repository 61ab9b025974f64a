"""
데이터베이스 연결 관리 모듈
"""
from pathlib import Path
from sqlalchemy import create_engine, Engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session, scoped_session
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from typing import Generator, Optional, Dict, Any
from config.settings import settings
from src.db.base import Base
from src.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """데이터베이스 연결 관리 클래스"""

    def __init__(self, database_url: Optional[str] = None):
        """
        Args:
            database_url: SQLAlchemy URL (None이면 설정의 storage_url 사용)
        """
        self.database_url = database_url or settings.storage_url
        self.engine: Engine = None
        self.SessionLocal: scoped_session = None
        self._initialize()

    def _engine_options(self) -> Dict[str, Any]:
        """드라이버별 엔진 옵션"""
        url = make_url(self.database_url)

        if url.get_backend_name() != "sqlite":
            return {"pool_size": 5, "max_overflow": 10, "pool_pre_ping": True}

        options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            # 인메모리 DB는 단일 연결을 공유해야 테이블이 유지됨
            options["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return options

    def _initialize(self):
        """데이터베이스 연결 초기화 및 스키마 생성"""
        try:
            self.engine = create_engine(
                self.database_url,
                echo=False,  # SQL 쿼리 로깅 (개발 시 True)
                **self._engine_options()
            )

            self.SessionLocal = scoped_session(
                sessionmaker(
                    autocommit=False,
                    autoflush=False,
                    bind=self.engine
                )
            )

            # 모델 등록 후 테이블 생성
            import src.db.models  # noqa: F401
            Base.metadata.create_all(self.engine)

            logger.info(f"데이터베이스 연결 초기화 완료: {make_url(self.database_url).get_backend_name()}")
        except Exception as e:
            logger.error(f"데이터베이스 연결 초기화 실패: {str(e)}")
            raise

    def get_session(self) -> Session:
        """
        데이터베이스 세션 획득

        Returns:
            Session 인스턴스
        """
        return self.SessionLocal()

    @contextmanager
    def get_db_session(self) -> Generator[Session, None, None]:
        """
        컨텍스트 매니저를 사용한 데이터베이스 세션 획득

        Yields:
            Session 인스턴스

        Example:
            with db_manager.get_db_session() as session:
                # DB 작업 수행
                pass
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"데이터베이스 세션 오류: {str(e)}")
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """
        데이터베이스 연결 상태 확인

        Returns:
            연결 상태 (True: 정상, False: 오류)
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.debug("데이터베이스 연결 상태: 정상")
            return True
        except Exception as e:
            logger.error(f"데이터베이스 연결 상태 확인 실패: {str(e)}")
            return False

    def close(self):
        """데이터베이스 연결 종료"""
        if self.SessionLocal is not None:
            self.SessionLocal.remove()
        if self.engine:
            self.engine.dispose()
            logger.info("데이터베이스 연결 종료")


# 전역 데이터베이스 매니저 인스턴스
db_manager = DatabaseManager()
