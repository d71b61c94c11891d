from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv
import logging
from pathlib import Path

# ロガーの設定
logger = logging.getLogger(__name__)

load_dotenv()

# プロジェクトルート基準の絶対パスを取得
# このファイルは `app/core/config.py` にあるため、プロジェクトルートは2つ上の親ディレクトリ
BASE_DIR = Path(__file__).resolve().parent.parent

# .envファイルの絶対パスを明示的に設定
ENV_FILE_PATH = BASE_DIR.parent / ".env"


def _split_csv(value: str) -> list[str]:
    """カンマ区切りの設定値をリストに変換（空要素は除く）"""
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    # Database
    database_host: str = Field(default="localhost", alias="DATABASE_HOST")
    database_port: int = Field(default=3306, alias="DATABASE_PORT")
    database_name: str = Field(default="employee_management", alias="DATABASE_NAME")
    database_username: str = Field(default="ems", alias="DATABASE_USERNAME")
    database_password: str = Field(default="password123", alias="DATABASE_PASSWORD")
    # 指定された場合は DATABASE_* より優先（テストや SQLite 運用向け）
    database_url: str = Field(default="", alias="DATABASE_URL")

    # 認証（トークン署名鍵は起動時に一度だけ読み込む）
    secret_key: str = Field(default="your-secret-key-here-make-it-long-and-secure", alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=600, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # ログ
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str = Field(default="logs/application.log", alias="LOG_FILE")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    # CORS（カンマ区切りで指定。React開発サーバーを既定で許可）
    cors_origins: str = Field(default="http://localhost:3000", alias="CORS_ALLOW_ORIGINS")
    cors_methods: str = Field(default="GET,POST,PUT,DELETE,OPTIONS", alias="CORS_ALLOW_METHODS")
    cors_headers: str = Field(default="*", alias="CORS_ALLOW_HEADERS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_max_age: int = Field(default=86400, alias="CORS_MAX_AGE")

    # 実行環境（development / production）
    environment: str = Field(default="development", alias="ENVIRONMENT")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        extra="ignore",  # 未定義の環境変数は無視
        populate_by_name=True,
    )

    def get_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"mysql+pymysql://{self.database_username}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    def get_log_file_path(self) -> Path:
        """ログファイルの絶対パスを取得（相対パスはプロジェクトルート基準）"""
        log_path = Path(self.log_file)
        if not log_path.is_absolute():
            log_path = BASE_DIR.parent / log_path
        return log_path

    @property
    def cors_allow_origins(self) -> list[str]:
        return _split_csv(self.cors_origins)

    @property
    def cors_allow_methods(self) -> list[str]:
        return _split_csv(self.cors_methods)

    @property
    def cors_allow_headers(self) -> list[str]:
        return _split_csv(self.cors_headers)


settings = Settings()

# 秘密鍵・DBパスワードはログに出さない
logger.info(
    "Loaded settings: environment=%s database=%s",
    settings.environment,
    settings.database_host if not settings.database_url else "DATABASE_URL",
)

@lru_cache
def get_settings() -> Settings:
    return settings
