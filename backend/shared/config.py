"""
Configuration management for the pitch deck backend.
"""

import json
import os
from typing import Any

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8080",
    "http://127.0.0.1:8080",
]


def _parse_origins(cors_origins: str | None, allowed_origins: str | None) -> list[str]:
    """Resolve CORS origins from CORS_ORIGINS (comma separated) or ALLOWED_ORIGINS (JSON)."""
    if cors_origins:
        return [origin.strip() for origin in cors_origins.split(",") if origin.strip()]
    if allowed_origins:
        parsed = json.loads(allowed_origins)
        if isinstance(parsed, str):
            return [parsed]
        return [str(origin) for origin in parsed]
    return list(DEFAULT_CORS_ORIGINS)


class ServiceConfig:
    """Configuration management for services using environment variables."""

    def __init__(self) -> None:
        """Initialize configuration by loading environment variables."""
        # Always load .env from backend directory (where app.py is located)
        env_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.env"))
        load_dotenv(dotenv_path=env_path, override=False)
        self.config: dict[str, Any] = {}
        self.load_from_env()

    def load_from_env(self) -> None:
        """Load configuration from environment variables."""
        self.config = {
            "openai_api_key": os.getenv("OPENAI_API_KEY"),
            "openai_model": os.getenv("OPENAI_MODEL", "gpt-4"),
            "openai_timeout": float(os.getenv("OPENAI_TIMEOUT", "60")),
            "azure_openai_key": os.getenv("AZURE_OPENAI_KEY"),
            "azure_openai_endpoint": os.getenv("AZURE_OPENAI_ENDPOINT"),
            "azure_openai_deployment": os.getenv("AZURE_OPENAI_DEPLOYMENT"),
            "use_azure_openai": os.getenv("USE_AZURE_OPENAI", "false").lower() == "true",
            "database_url": os.getenv("DATABASE_URL"),
            "auto_create_tables": os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true",
            "debug": os.getenv("DEBUG", "false").lower() == "true",
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "allowed_origins": _parse_origins(
                os.getenv("CORS_ORIGINS"), os.getenv("ALLOWED_ORIGINS")
            ),
            "host": os.getenv("HOST", "0.0.0.0"),
            "port": int(os.getenv("PORT", "3001")),
            "auth_driver": os.getenv("AUTH_DRIVER", "firebase").lower(),
            "firebase_service_account_base64": os.getenv("FIREBASE_SERVICE_ACCOUNT_BASE64"),
            "firebase_service_account_path": os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH")
            or os.getenv("GOOGLE_APPLICATION_CREDENTIALS"),
            "firebase_check_revoked": os.getenv("FIREBASE_CHECK_REVOKED", "false").lower() == "true",
            "secret_key": os.getenv("SECRET_KEY", "dev-secret-key-change-in-production"),
            "jwt_algorithm": os.getenv("JWT_ALGORITHM", "HS256"),
            "access_token_expire_minutes": int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")),
            "prompt_config_path": os.getenv("PROMPT_CONFIG_PATH"),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self.config.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config[key] = value

    def reload(self) -> None:
        """Reload configuration from environment variables."""
        self.load_from_env()


# Global configuration instance
config = ServiceConfig()
