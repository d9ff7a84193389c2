"""
Application settings
"""
import os
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # 파일 저장
    DATA_DIR: str = "./data"
    UPLOAD_DIR: Optional[str] = None

    # 데이터베이스 (기본값: DATA_DIR/billow.db)
    DATABASE_URL: Optional[str] = None

    # 서버
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # 보안
    SECRET_KEY: str = "billow-secret-change-in-production"
    BCRYPT_ROUNDS: int = 12

    # OCR
    OCR_LANG: str = "eng"
    OCR_TIMEOUT: int = 0  # seconds, 0 = no limit
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # 환경
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return "sqlite:///" + os.path.join(self.DATA_DIR, "billow.db")

    @property
    def upload_dir(self) -> str:
        return self.UPLOAD_DIR or os.path.join(self.DATA_DIR, "uploads")


settings = Settings()
