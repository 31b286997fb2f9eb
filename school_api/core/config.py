import os
import json
from typing import Dict, Optional, Union

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import field_validator

project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
env_path = os.path.join(project_root, '.env')
load_dotenv(env_path)

SUPPORTED_BACKENDS = ("json", "mongo", "sql")


class Settings(BaseSettings):
    # Basic settings
    API_PREFIX: str = ""
    PROJECT_NAME: str = "School Admin API"
    VERSION: str = "1.0.0"

    # Storage backend used by every resource unless overridden below
    STORAGE_BACKEND: str = "json"
    # Per-resource backend, e.g. {"teachers": "mongo", "professionals": "mongo"}
    STORAGE_BACKEND_OVERRIDES: Union[Dict[str, str], str] = {}

    @field_validator("STORAGE_BACKEND", mode="before")
    @classmethod
    def normalize_backend(cls, v: str) -> str:
        v = str(v).strip().lower()
        if v not in SUPPORTED_BACKENDS:
            raise ValueError(f"Unsupported storage backend: {v}")
        return v

    @field_validator("STORAGE_BACKEND_OVERRIDES", mode="before")
    @classmethod
    def assemble_overrides(cls, v: Union[str, Dict[str, str], None]) -> Dict[str, str]:
        if v is None or v == "":
            return {}
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except json.JSONDecodeError:
                # Plain "teachers=mongo,professionals=mongo" form
                pairs = [item.split("=", 1) for item in v.split(",") if "=" in item]
                v = {key.strip(): value.strip() for key, value in pairs}
        overrides = {str(key).strip(): str(value).strip().lower() for key, value in v.items()}
        for resource, backend in overrides.items():
            if backend not in SUPPORTED_BACKENDS:
                raise ValueError(f"Unsupported storage backend for {resource}: {backend}")
        return overrides

    # File-backed store
    DATA_DIR: str = "data"

    # Document store
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "school_admin"
    MONGO_TIMEOUT_MS: int = 5000

    # Relational store
    DB_HOST: str = "localhost"
    DB_PORT: str = "3306"
    DB_USER: str = "root"
    DB_PASSWORD: str = "password"
    DB_NAME: str = "school_admin"

    # Defaults to an embedded SQLite file; blank it to use the MySQL settings above
    DATABASE_URI: Optional[str] = "sqlite:///data/school_admin.db"

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """
        Database URI for the relational store
        """
        if self.DATABASE_URI:
            return self.DATABASE_URI

        return f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # Wrap success bodies in {"code", "data", "msg"}
    WRAP_RESPONSES: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    RELOAD: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    def backend_for(self, resource: str) -> str:
        """Storage backend configured for a resource path (e.g. "teachers")."""
        return self.STORAGE_BACKEND_OVERRIDES.get(resource, self.STORAGE_BACKEND)

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
