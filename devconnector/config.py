from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    APP_NAME: str = "DevConnector"
    SECRET_KEY: str = "your_secret_key"
    ALGORITHM: str = "HS256"
    # 360000 seconds, the lifetime the frontend was built around
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 6000
    DATABASE_URL: str = "sqlite:///./devconnector.db"

    # GitHub repo listing for profiles; anonymous calls work but are rate limited
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_CLIENT_ID: Optional[str] = None
    GITHUB_CLIENT_SECRET: Optional[str] = None
    GITHUB_TIMEOUT: float = 10.0

    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # CORS: default allow local frontend on port 3000 (can be overridden via .env)
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"  # Load environment variables from the .env file


settings = Settings()
