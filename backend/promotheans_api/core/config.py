from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="ignore")

    database_url: str
    database_url_sync: str | None = None
    db_pool_size: int = 10
    auto_create_tables: bool = True

    api_prefix: str = "/api/v1"
    cors_origins: str = "*"
    log_level: str = "INFO"

    secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 24 * 60

    admin_username: str = "admin"
    admin_password: str = "admin123"

    default_video_id: str = "zlMFsDJNneE"
    default_video_url: str = "https://www.youtube.com/watch?v=zlMFsDJNneE"

    upload_dir: str = "assets/community_art"
    max_file_size: int = 5 * 1024 * 1024

    use_ftp: bool = False
    ftp_host: str | None = None
    ftp_user: str | None = None
    ftp_password: str | None = None
    ftp_port: int = 21
    ftp_secure: bool = False
    ftp_timeout: int = 60
    ftp_remote_dir: str = "assets/community_art"

    rate_limit_window_seconds: int = 15 * 60
    rate_limit_max_requests: int = 100

    @property
    def ftp_enabled(self) -> bool:
        return bool(self.use_ftp and self.ftp_host and self.ftp_user and self.ftp_password)

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
