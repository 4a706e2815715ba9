from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # Required: the process refuses to start without them
    database_url: str
    SECRET_KEY: str

    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Session cookie set by POST /login
    SESSION_COOKIE_NAME: str = "session_token"
    SESSION_COOKIE_SECURE: bool = False

    # Dashboard list view
    PAGE_SIZE: int = 8

    # Logging
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_FILE: str = "error.log"

    class Config:
        env_file = ".env"

settings = Settings()
