"""
서버 시작 스크립트
"""
import uvicorn
import sys
from config.settings import settings

if __name__ == "__main__":
    print("=" * 70)
    print("Lex AI 서버 시작 중...")
    print("=" * 70)
    try:
        uvicorn.run(
            "src.api.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=settings.environment == "development",
            log_level=settings.log_level.lower()
        )
    except KeyboardInterrupt:
        print("\n서버 종료")
    except Exception as e:
        print(f"\n서버 시작 실패: {e}")
        sys.exit(1)
