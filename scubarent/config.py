import logging
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

_DEFAULT_DB = "sqlite:///./data/scubarent.db"


class Settings(BaseSettings):
    APP_ENV: str = "development"
    DATABASE_URL: str = _DEFAULT_DB
    CENTER_NAME: str = "Dive Center"
    BASKET_NUMBER_PREFIX: str = "BASK"
    DEFAULT_RENTAL_DAYS: int = 1

    class Config:
        env_file = ".env"


settings = Settings()

if settings.DATABASE_URL.startswith("sqlite"):
    if settings.APP_ENV == "production":
        logger.warning("SQLite v produkci neserializuje souběžné výpůjčky na úrovni řádků, použijte PostgreSQL.")
    elif settings.DATABASE_URL == _DEFAULT_DB:
        logger.warning("DATABASE_URL má výchozí hodnotu, nastavte ji v .env pro produkci")
