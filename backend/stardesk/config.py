"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Stockage : json (fichier unique), sql (SQLAlchemy embarqué) ou memory
    STORE_BACKEND: str = "json"
    DB_PATH: str = "db.json"
    DATABASE_URL: str = "sqlite:///stardesk.db"

    # Sessions et mots de passe
    TOKEN_TTL_MINUTES: int = 60 * 24
    PASSWORD_MIN_LENGTH: int = 8
    PBKDF2_ITERATIONS: int = 120_000

    # Boutique
    DESK1_PRICE: int = 5

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # Environnement
    ENV: str = "development"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
