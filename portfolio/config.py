"""
Configuration management for the portfolio backend.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # LLM
    deepseek_api_key: str = ""
    llm_model: str = "deepseek-chat"

    # Database
    database_url: str = ""

    # Runtime
    environment: str = "production"  # development/production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000"
    chat_rate_limit: str = "20/minute"

    # Owner contact (gates end-of-task notifications)
    user_email: str = ""
    user_phone: str = ""

    # Email (SMTP)
    email_server_host: str = "localhost"
    email_server_port: int = 587
    email_server_user: str = ""
    email_server_password: str = ""
    email_from: str = ""

    # SMS (Twilio)
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""

    # Agent settings
    resume_path: str = ""  # PDF attached to distributed applications
    reminder_lookahead_hours: int = 48
    owner_prompt_cache_ttl: int = 300  # seconds, 0 disables caching
    notification_timeout: float = 30.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()
