from pydantic_settings import BaseSettings, SettingsConfigDict

# Ensure env file is loaded before Settings() reads environment variables
from afrik_student.core.env import load_env
load_env()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=None,  # loaded via afrik_student.core.env (ENV_FILE)
        extra="ignore",
        case_sensitive=True,
    )

    DATABASE_URL: str = "sqlite:///./afrik_student.db"
    LOG_LEVEL: str = "INFO"

    # comma-separated: "http://a,http://b"
    CORS_ORIGINS: str = ""

    # Blob storage: local filesystem by default, S3 when USE_LOCAL_STORAGE is false
    USE_LOCAL_STORAGE: bool = True
    STORAGE_PATH: str = "./storage/public"
    STORAGE_PUBLIC_URL: str = "/storage"
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None
    AWS_S3_BUCKET: str = "afrik-student-dev"
    AWS_REGION: str = "us-east-1"
    AWS_S3_ENDPOINT_URL: str | None = None
    STORAGE_URL_EXPIRY_SECONDS: int = 600

    # Uploaded lesson attachments
    MAX_UPLOAD_SIZE_BYTES: int = 500 * 1024 * 1024

    @property
    def cors_origins(self) -> list[str]:
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]


settings = Settings()
