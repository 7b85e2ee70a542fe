# tradejournal/config.py
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Trading Journal"

    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "trading_journal"
    TRADES_COLLECTION: str = "trades"

    # "mongo" for the server variant, "file" for the standalone variant
    STORAGE_BACKEND: str = "mongo"
    LOCAL_STORE_DIR: str = "data"

    RISK_FREE_RATE: float = 0.02

    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"


settings = Settings()
