from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class StorageConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='LEADERBOARD_STORAGE_')

    BACKEND: Literal['memory', 'file', 'postgres'] = 'memory'
    LOG_PATH: str = 'scores.log'

    HOST: str = 'localhost'
    PORT: int = 5432
    DATABASE: str = 'leaderboard'
    USER: str = 'postgres'
    PASSWORD: str = 'postgres'
    MIN_SIZE: int = 2
    MAX_SIZE: int = 10
    COMMAND_TIMEOUT: float = 10.0

    max_retries: int = 3
    retry_delay: int = 1

class ServiceConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='LEADERBOARD_')

    MAX_COUNT: int = 100
    DEFAULT_COUNT: int = 10
    LOG_LEVEL: str = 'INFO'
    HOST: str = '0.0.0.0'
    PORT: int = 8000
    SHUTDOWN_TIMEOUT: float = 5.0

storage = StorageConfig()
service = ServiceConfig()
