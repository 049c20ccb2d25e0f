"""
Application configuration.

This module defines the application settings using a Pydantic model
populated from environment variables (a ``.env`` file in the backend
directory is loaded first).
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from typing import List
import os
from dotenv import load_dotenv

# Load .env from backend directory (works regardless of cwd when running uvicorn)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


class Settings(BaseModel):
    """
    Application configuration settings.

    Can be configured via environment variables or .env file.
    Environment variable names are uppercase (e.g., MONGODB_URI).

    Attributes:
        STORAGE_BACKEND: "memory" or "mongo"
        MONGODB_URI: MongoDB connection string
        MONGODB_DB: MongoDB database name
        MONGODB_RECIPES_COLLECTION: Collection holding recipes
        MONGODB_SUBSTITUTIONS_COLLECTION: Collection holding substitution entries
        MONGODB_TIMEOUT_MS: Server selection timeout in milliseconds
        CORS_ORIGINS: Origins allowed to call the API
        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR)
        PORT: Development server port
    """

    # Storage Configuration
    STORAGE_BACKEND: str = Field(
        default_factory=lambda: os.getenv("STORAGE_BACKEND", "memory"),
        description="Storage backend: 'memory' or 'mongo'"
    )

    MONGODB_URI: str = Field(
        default_factory=lambda: os.getenv("MONGODB_URI", "mongodb://127.0.0.1:27017"),
        description="MongoDB connection string"
    )

    MONGODB_DB: str = Field(
        default_factory=lambda: os.getenv("MONGODB_DB", "smart_recipe_optimizer"),
        description="MongoDB database name"
    )

    MONGODB_RECIPES_COLLECTION: str = Field(
        default_factory=lambda: os.getenv("MONGODB_RECIPES_COLLECTION", "recipes"),
        description="Collection holding recipes"
    )

    MONGODB_SUBSTITUTIONS_COLLECTION: str = Field(
        default_factory=lambda: os.getenv("MONGODB_SUBSTITUTIONS_COLLECTION", "substitutions"),
        description="Collection holding substitution entries"
    )

    MONGODB_TIMEOUT_MS: int = Field(
        default_factory=lambda: int(os.getenv("MONGODB_TIMEOUT_MS", "5000")),
        ge=100,
        le=60000,
        description="MongoDB server selection timeout in milliseconds"
    )

    # HTTP Configuration
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
            if origin.strip()
        ],
        description="Origins allowed by CORS"
    )

    PORT: int = Field(
        default_factory=lambda: int(os.getenv("PORT", "5000")),
        ge=1,
        le=65535,
        description="Development server port"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"),
        description="Logging level (DEBUG/INFO/WARNING/ERROR)"
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )
        return v_upper

    @field_validator('STORAGE_BACKEND')
    @classmethod
    def validate_storage_backend(cls, v):
        """Ensure the storage backend is supported."""
        v_lower = v.strip().lower()
        if v_lower not in ("memory", "mongo"):
            raise ValueError("STORAGE_BACKEND must be 'memory' or 'mongo'")
        return v_lower

    @field_validator('MONGODB_URI')
    @classmethod
    def validate_mongodb_uri(cls, v):
        """Ensure the connection string uses a MongoDB scheme."""
        if not v.startswith(('mongodb://', 'mongodb+srv://')):
            raise ValueError("MONGODB_URI must start with mongodb:// or mongodb+srv://")
        return v

    # Values come from the environment through default factories
    model_config = {"validate_default": True}


# Create global settings instance
settings = Settings()


# Configure logging based on settings
def configure_logging():
    """Configure application logging based on settings."""
    import logging

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {settings.LOG_LEVEL} level")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    if settings.STORAGE_BACKEND == "mongo":
        logger.info(f"MongoDB database: {settings.MONGODB_DB}")


# Initialize logging on import
configure_logging()
