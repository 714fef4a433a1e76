
from pydantic_settings import BaseSettings, SettingsConfigDict


class ENV(BaseSettings):
    model_config = SettingsConfigDict(validate_default=True, env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DEBUG: bool = False

    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_NAME: str = "campaigns"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASS: str = "postgres"

    # полный URL перекрывает POSTGRES_* (например sqlite+aiosqlite:///./dev.db)
    DATABASE_URL: str | None = None

    api_token: str = ""

    HOST: str = "0.0.0.0"
    PORT: int = 8000


class Settings():
    def __init__(self):
        self.env = ENV()

    def generate_postgres_url(self) -> str:
        return f"postgresql+asyncpg://{self.env.POSTGRES_USER}:{self.env.POSTGRES_PASS}@{self.env.POSTGRES_HOST}:{self.env.POSTGRES_PORT}/{self.env.POSTGRES_NAME}"

    def get_database_url(self) -> str:
        if self.env.DATABASE_URL:
            return self.env.DATABASE_URL
        return self.generate_postgres_url()
