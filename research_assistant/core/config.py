from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # Base
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Research Assistant"
    VERSION: str = "0.1.0"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8080
    RELOAD: bool = False

    # Uploads
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024  # 10 MB

    class Config:
        case_sensitive = True
        env_file = ".env"
        extra = "ignore"

settings = Settings()
