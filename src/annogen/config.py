import os

from pydantic import BaseModel


class Settings(BaseModel):
    handlers: list[str] = ["lua"]
    log_level: str = "WARNING"


def get_settings() -> Settings:
    handlers = os.getenv("ANNOGEN_HANDLERS", "lua")
    return Settings(
        handlers=[spec.strip() for spec in handlers.split(",") if spec.strip()],
        log_level=os.getenv("ANNOGEN_LOG_LEVEL", "WARNING").upper(),
    )
