from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    PROJECT_NAME: str = "Trip Planner API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Plan trips, itineraries, bookings, budgets and travel documents"

    # Local dev frontends
    CORS_ORIGIN_REGEX: str = r"^http:\/\/(localhost|127\.0\.0\.1)(:\d{1,5})?$"

    LOG_LEVEL: str = "INFO"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    TRIP_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Reporting windows
    DOCUMENT_EXPIRY_WINDOW_DAYS: int = 30
    RECENT_NOTE_DAYS: int = 7

    PASSWORD_MIN_LENGTH: int = 8

    class Config:
        env_file = ".env"


settings = Settings()
