from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # upstream ordering backend
    api_base_url: str = "http://localhost:3000/api"
    request_timeout: float = 10

    # origin tag stamped on every order payload
    order_app: str = "retail"

    log_level: str = "INFO"

    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @property
    def api_root(self):
        return self.api_base_url.rstrip("/")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"

settings = Settings()
