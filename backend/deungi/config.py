"""애플리케이션 설정

환경변수는 .env 파일에서 관리한다. 점수/검증 임계값은 설정이 아니라
각 모듈의 상수다 (결과 재현성).
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# 프로젝트 루트: backend/ 의 상위 디렉토리
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """환경변수 로드 설정"""

    # 로깅 (DEBUG / INFO / WARNING / ERROR)
    LOG_LEVEL: str = "INFO"

    # 입력 텍스트 제한
    MAX_INPUT_LENGTH: int = 50_000   # 살균 단계에서 이 길이로 자른다
    MIN_INPUT_LENGTH: int = 20       # API는 이보다 짧은 텍스트를 거부

    # API
    API_TITLE: str = "등기부등본 리스크 분석 API"

    model_config = {
        "env_file": str(_PROJECT_ROOT / ".env"),
        "env_file_encoding": "utf-8",
    }


# 싱글턴 인스턴스
settings = Settings()
