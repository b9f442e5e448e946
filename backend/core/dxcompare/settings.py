# dxcompare/settings.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "DxCompare"
    VERSION: str = "1.0.0"

    # Paralelismo del orquestador (1 = secuencial)
    MAX_WORKERS: int = 4

    # Espera máxima del comparador externo en segundos
    EXTERNAL_TIMEOUT_SECS: float = 300.0

    # Filas analizadas para detectar el dialecto CSV
    CSV_SNIFF_LINES: int = 10

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DXCOMPARE_",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Crea una instancia única de Settings que se reutiliza.
    El decorador lru_cache asegura que solo se cree una vez.
    """
    return Settings()
