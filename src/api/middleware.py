"""
API 미들웨어 모듈
"""
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from src.utils.logger import get_logger
from src.utils.helpers import mask_personal_info

logger = get_logger(__name__)

# 문서 전문이 담기는 요청은 바디 앞부분만 기록
MAX_LOGGED_BODY_CHARS = 500


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청 로깅 미들웨어"""

    async def dispatch(self, request: Request, call_next):
        """요청 처리 및 로깅"""
        start_time = time.time()

        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        owner_id = request.headers.get("x-owner-id", "-")

        logger.info(f"요청 수신: {method} {path} - owner: {owner_id} - IP: {client_ip}")

        # 요청 바디 로깅 (개인정보 마스킹)
        if method in ["POST", "PUT", "PATCH"]:
            try:
                body = await request.body()
                body_str = body.decode("utf-8")[:MAX_LOGGED_BODY_CHARS]
                logger.debug(f"요청 바디: {mask_personal_info(body_str)}")
            except UnicodeDecodeError as e:
                logger.warning(f"요청 바디 로깅 실패: {str(e)}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"요청 처리 실패: {method} {path} - "
                f"오류: {str(e)} - "
                f"소요 시간: {process_time:.3f}초"
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"응답 완료: {method} {path} - "
            f"상태: {response.status_code} - "
            f"소요 시간: {process_time:.3f}초"
        )

        response.headers["X-Process-Time"] = str(process_time)
        return response
