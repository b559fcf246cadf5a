from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database (PostgreSQL em produção)
    DATABASE_URL: str
    # Schema do PostgreSQL usado no search_path (ex.: "production", "development")
    DATABASE_SCHEMA: Optional[str] = None

    # JWT
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24

    # App Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Energia Livre Backend"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    # Fuso usado para calcular a semana corrente das movimentações
    TIMEZONE: str = "America/Sao_Paulo"

    # Cache / Redis
    REDIS_URL: Optional[str] = None
    REDIS_PASSWORD: Optional[str] = None
    CACHE_TTL_SECONDS: int = 300

    # Object Storage (S3-compatible) para as faturas em PDF
    S3_BUCKET: Optional[str] = None
    S3_ENDPOINT: Optional[str] = None
    S3_ACCESS_KEY: Optional[str] = None
    S3_SECRET_KEY: Optional[str] = None
    S3_REGION: Optional[str] = None
    # Prefixo privado dentro do bucket (ex.: ".private")
    PRIVATE_OBJECT_DIR: Optional[str] = None
    # Faturas são lidas inteiras em memória antes do upload. Default: 10 MB.
    INVOICE_MAX_BYTES: int = 10 * 1024 * 1024

    # Afiliados
    AFFILIATE_CODE_LENGTH: int = 8
    AFFILIATE_COMMISSION_PER_REFERRAL: int = 100
    FRONTEND_URL: str = "https://energialivre.com.br"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "https://energialivre.com.br",
        "https://api.energialivre.com.br",
    ]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @model_validator(mode='after')
    def assemble_redis_url(self) -> 'Settings':
        if self.REDIS_PASSWORD and self.REDIS_URL:
            # Se a URL já contiver senha (ex: :password@...), não fazemos nada
            if "@" in self.REDIS_URL:
                return self

            import urllib.parse
            if "redis://" in self.REDIS_URL:
                encoded_pwd = urllib.parse.quote_plus(self.REDIS_PASSWORD)
                # Formato: redis://:PASSWORD@HOST:PORT/DB
                self.REDIS_URL = self.REDIS_URL.replace("redis://", f"redis://:{encoded_pwd}@", 1)
        return self

    def get_cors_origins(self) -> list[str]:
        """Retorna lista de origens CORS permitidas (inclui FRONTEND_URL)."""
        origins = self.CORS_ORIGINS.copy()
        if self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins

    def object_key(self, path: str) -> str:
        """Monta a chave completa no bucket a partir do caminho lógico da fatura."""
        path = path.lstrip("/")
        if self.PRIVATE_OBJECT_DIR:
            return f"{self.PRIVATE_OBJECT_DIR.rstrip('/')}/{path}"
        return path

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
