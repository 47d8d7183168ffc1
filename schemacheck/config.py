import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    REF_LOAD_TIMEOUT: float = float(os.getenv("REF_LOAD_TIMEOUT", "10.0"))
    MAX_REF_DEPTH: int = int(os.getenv("MAX_REF_DEPTH", "50"))
    ALLOW_REMOTE_REFS: bool = os.getenv("ALLOW_REMOTE_REFS", "true").lower() in ("1", "true", "yes")
    API_ALLOW_REMOTE_REFS: bool = os.getenv("API_ALLOW_REMOTE_REFS", "false").lower() in ("1", "true", "yes")


settings = Settings()
