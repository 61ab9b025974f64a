"""
로깅 유틸리티 모듈
"""
import logging
import logging.config
import time
import inspect
import functools
from pathlib import Path
from typing import Callable, Any, Optional
import yaml
from config.settings import settings


def setup_logging(config_path: str = "config/logging.yaml") -> None:
    """
    로깅 설정 초기화

    Args:
        config_path: 로깅 설정 파일 경로
    """
    config_file = Path(config_path)

    if config_file.exists():
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
            logging.config.dictConfig(config)
    else:
        # 기본 로깅 설정
        logging.basicConfig(
            level=getattr(logging, settings.log_level.upper()),
            format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def get_logger(name: str) -> logging.Logger:
    """
    로거 획득

    Args:
        name: 로거 이름

    Returns:
        Logger 인스턴스
    """
    return logging.getLogger(name)


def log_execution_time(logger: Optional[logging.Logger] = None):
    """
    함수 실행 시간 측정 데코레이터 (동기/비동기 함수 모두 지원)

    Args:
        logger: 로거 인스턴스 (None이면 함수의 모듈명으로 로거 생성)
    """
    def decorator(func: Callable) -> Callable:
        log = logger or get_logger(func.__module__)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs) -> Any:
                start_time = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    log.error(
                        f"{func.__qualname__} 실행 실패 - 실행 시간: "
                        f"{time.perf_counter() - start_time:.3f}초 - 오류: {str(e)}"
                    )
                    raise
                log.debug(
                    f"{func.__qualname__} 실행 완료 - 실행 시간: "
                    f"{time.perf_counter() - start_time:.3f}초"
                )
                return result

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"{func.__qualname__} 실행 실패 - 실행 시간: "
                    f"{time.perf_counter() - start_time:.3f}초 - 오류: {str(e)}"
                )
                raise
            log.debug(
                f"{func.__qualname__} 실행 완료 - 실행 시간: "
                f"{time.perf_counter() - start_time:.3f}초"
            )
            return result

        return wrapper
    return decorator
