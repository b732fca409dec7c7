from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_TITLE: str = "Conveyancing Quote Service"
    API_DESCRIPTION: str = "Calculates conveyancing quotes: legal fees, disbursements and stamp duty"
    API_VERSION: str = "1.0.0"

    # Enquiry hand-off; left empty the quote endpoint sends nothing
    WEBHOOK_URL: Optional[str] = None
    WEBHOOK_TIMEOUT: int = 10
    WEBHOOK_RETRIES: int = 3

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
