from functools import lru_cache
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


class Settings(BaseModel):
    database_url: str = Field(default="sqlite+aiosqlite:///./reservations.db")
    echo_sql: bool = Field(default=False)
    admin_password: str = Field(default="sindico2025")
    auth_secret: str = Field(default="change-me")
    auth_algorithm: str = Field(default="HS256")
    access_token_minutes: int = Field(default=30, ge=1)
    admin_whatsapp_number: str = Field(default="5541999999999")
    pix_key_formatted: str = Field(default="42.181.669/0001-77")
    pix_key_raw: str = Field(default="42181669000177")
    pix_company_name: str = Field(default="estasa empresa e serv. técnicos administrativos ltda")
    local_timezone: str = Field(default="America/Sao_Paulo")


def _env(name: str) -> str:
    return os.getenv(name, Settings.model_fields[name.lower()].default)


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_url=_env("DATABASE_URL"),
        echo_sql=bool(int(os.getenv("ECHO_SQL", "0"))),
        admin_password=_env("ADMIN_PASSWORD"),
        auth_secret=_env("AUTH_SECRET"),
        auth_algorithm=_env("AUTH_ALGORITHM"),
        access_token_minutes=int(os.getenv("ACCESS_TOKEN_MINUTES", "30")),
        admin_whatsapp_number=_env("ADMIN_WHATSAPP_NUMBER"),
        pix_key_formatted=_env("PIX_KEY_FORMATTED"),
        pix_key_raw=_env("PIX_KEY_RAW"),
        pix_company_name=_env("PIX_COMPANY_NAME"),
        local_timezone=_env("LOCAL_TIMEZONE"),
    )
