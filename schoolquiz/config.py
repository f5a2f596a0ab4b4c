from fastapi import Request
from pydantic_settings import BaseSettings
from pydantic import SecretStr
from typing import List, Optional
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    app_name: str = "School Quiz API"
    version: str = "1.0.0"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Supabase Configuration
    supabase_url: Optional[str] = os.getenv("SUPABASE_URL")
    supabase_service_role_key: SecretStr = SecretStr(os.getenv("SUPABASE_SERVICE_ROLE_KEY", ""))

    # JWT Configuration (tokens are issued by Supabase Auth)
    jwt_secret: SecretStr = SecretStr(os.getenv("JWT_SECRET", "change-me-to-your-supabase-jwt-secret"))
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_audience: str = os.getenv("JWT_AUDIENCE", "authenticated")

    # Quiz defaults
    default_time_limit: int = 30  # minutes
    timezone: str = os.getenv("TIMEZONE", "UTC")

    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

settings = Settings()

def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with"""
    return request.app.state.settings
