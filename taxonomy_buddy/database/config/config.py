"""
Configuration — Pydantic v2 Settings (env / .env)
=================================================

Purpose
-------
Centralized, strongly-typed application configuration using:
- Pydantic v2 `BaseSettings` for environment-driven values
- `pydantic-settings` v2 for `.env` loading and model config

Load Order & Behavior
---------------------
- Values are read from the environment; if not present, `.env` is used.
- Missing required fields raise a validation error at import time.
- `extra="ignore"`: unknown env vars are ignored (not an error).
- Database fields default to a local SQLite file so the service can run
  without a database server; set `DB_DRIVER_NAME=postgresql+psycopg2` and the
  credentials for a shared deployment.

Usage
-----
from taxonomy_buddy.database.config.config import settings

# Example
db_name = settings.DB_DATABASE_NAME
expiry = settings.ACCESS_TOKEN_EXPIRE_MINUTES

Security
--------
- Never commit secrets or the `.env` file to source control.
- Prefer runtime environment variables in production (K8s/Secrets Manager/etc.).
"""


from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Provides strongly typed access to environment values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    FRONTEND_URL: str = Field("http://localhost:3000", description="Base URL of the frontend client application.")
    DB_DRIVER_NAME: str = Field("sqlite", description="Database driver (e.g., `postgresql+psycopg2`, `sqlite`).")
    DB_USERNAME: str | None = Field(None, description="Database username credential.")
    DB_PASSWORD: str | None = Field(None, description="Database password credential.")
    DB_HOST: str | None = Field(None, description="Hostname or IP address of the database server.")
    DB_PORT: int | None = Field(None, description="Port of the database server.")
    DB_DATABASE_NAME: str = Field("cctb.db", description="Name of the database (file path for SQLite).")
    SECRET_KEY: str = Field(..., description="Secret key for signing session tokens.")
    ALGORITHM: str = Field("HS256", description="JWT signing algorithm.")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60, description="Duration (in minutes) before access tokens expire.")
    LOG_LEVEL: str = Field("INFO", description="Root log level for the application loggers.")
    CREATE_SCHEMA: bool = Field(True, description="Create missing tables during application startup.")

# Singleton instance of Settings, ready to be imported across the app
settings = Settings()
"""Defines a Settings object that contains the contents of the .env file"""
