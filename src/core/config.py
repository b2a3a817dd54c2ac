from pathlib import Path
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_PATH = BASE_DIR / ".env"


class Settings(BaseSettings):

    DB_USER: str = "postgres"
    DB_PASSWORD: SecretStr = SecretStr("")
    DB_HOST: str = "localhost"  # 기본값 설정 (없으면 로컬로 간주)
    DB_PORT: int = 5432
    DB_NAME: str = "recipes"
    DATABASE_URL: str | None = None  # 설정 시 POSTGRES URL 대신 사용 (테스트용 sqlite 등)
    DB_ECHO: bool = False
    DB_AUTO_CREATE: bool = False

    JWT_SECRET_KEY: SecretStr
    JWT_EXPIRE_DAYS: int = 7

    DEFAULT_IMAGE_URL: str = "https://placehold.co/600x400?text=Sin+Imagen"
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    @property
    def POSTGRES_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        password = self.DB_PASSWORD.get_secret_value()
        return f"postgresql+asyncpg://{self.DB_USER}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",  # 정의되지 않은 변수는 무시
        case_sensitive=True,
    )


settings = Settings()  # 유효성 체크
