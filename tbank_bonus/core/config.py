from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_TITLE: str = "TBank Bonus Calculator"

    # Локально: файл рядом с приложением.
    # Heroku (эфемерная ФС): sqlite://  -> in-memory
    # Vercel: sqlite:////tmp/bonus_calculator.db
    DATABASE_URL: str = "sqlite:///./bonus_calculator.db"
    DB_ECHO: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    HEALTH_MESSAGE: str = "TBank Bonus Calculator API is running"

    CORS_ORIGINS: list[str] = ["*"]

    # None = static/ внутри пакета
    STATIC_DIR: str | None = None

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
