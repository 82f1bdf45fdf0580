"""
환경 변수 기반 설정
.env 파일이 있으면 먼저 로드합니다.
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(',') if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """서비스 설정"""
    log_level: str = "INFO"
    ddl_max_length: int = 100_000
    cors_origins: List[str] = field(default_factory=lambda: _split_origins(DEFAULT_CORS_ORIGINS))
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """
        환경 변수에서 설정을 읽어 Settings를 생성합니다.

        Raises:
            ValueError: 숫자 설정값이 정수가 아닌 경우
        """
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            ddl_max_length=int(os.getenv("DDL_MAX_LENGTH", "100000")),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", "8000")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
