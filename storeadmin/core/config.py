# storeadmin/core/config.py

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Classe de configurações da aplicação, carregada a partir de variáveis de ambiente.
    """
    # --- Configurações do Banco de Dados ---
    DATABASE_URL: str = "sqlite:///./default.db"

    # --- Configurações do Celery (broker e backend de resultados) ---
    REDIS_URL: str = "redis://localhost:6379/0"

    # De quantas em quantas horas a varredura de status dos banners roda
    STATUS_SWEEP_INTERVAL_HOURS: int = 5

    # Frete fixo cobrado no checkout
    SHIPPING_FEE: Decimal = Decimal("100.00")

    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=True)


# Instância única das configurações usada em toda a aplicação.
settings = Settings()
