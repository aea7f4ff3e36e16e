from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    database_url: str = "sqlite:///./contact.db"

    host: str = "0.0.0.0"
    port: int = 5000

    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_bytes: int = 5 * 1024 * 1024
    allowed_image_types: List[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]
    allowed_image_extensions: List[str] = [".jpg", ".jpeg", ".png", ".gif", ".webp"]
    # remove the staged image when a later stage rejects the submission
    cleanup_orphaned_uploads: bool = False

    password_hash_method: str = "pbkdf2:sha256:600000"
    password_salt_length: int = 16

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="CONTACT_", env_file=".env", extra="ignore")

@lru_cache
def get_settings() -> Settings:
    return Settings()
