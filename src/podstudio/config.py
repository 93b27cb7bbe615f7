"""Configuration management for podstudio."""

import os
import datetime
from pathlib import Path
from typing import Optional, Union
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from enum import Enum
import logging
import keyring
from keyring.errors import KeyringError
import getpass

logger = logging.getLogger(__name__)

class SpeechProviderType(str, Enum):
    POLLY = "polly"

class StorageBackend(str, Enum):
    S3 = "s3"
    LOCAL = "local"

DEFAULT_PODSTUDIO_DIR = os.getenv('PODSTUDIO_DIR', str(Path.home() / '.podstudio'))

class PathManager:
    """Manages the local directories used for output and logs."""

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

        self.subdirs = {
            "output": self.base_dir / "output",  # Locally published podcasts
            "logs": self.base_dir / "logs",
        }

        for subdir in self.subdirs.values():
            subdir.mkdir(parents=True, exist_ok=True)

        logger.debug(f"Initialized path manager with base directory: {self.base_dir}")

    def get_path(self, category: str) -> Path:
        """Get the path for a specific category."""
        if category in self.subdirs:
            return self.subdirs[category]
        new_path = self.base_dir / category
        new_path.mkdir(parents=True, exist_ok=True)
        self.subdirs[category] = new_path
        return new_path

    def new_request_id(self, prefix: str = "podcast") -> str:
        """Generate a timestamped identifier for locally rendered podcasts."""
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{prefix}_{timestamp}"

class SecureKeyManager:
    """Manages secure storage and retrieval of API keys."""

    APP_NAME = "podstudio"

    @staticmethod
    def get_key(service_name: str) -> Optional[str]:
        """Retrieve an API key from secure storage."""
        try:
            return keyring.get_password(SecureKeyManager.APP_NAME, service_name)
        except KeyringError as e:
            logger.error(f"Failed to retrieve key for {service_name}: {e}")
            return None

    @staticmethod
    def set_key(service_name: str, key: str) -> bool:
        """Store an API key in secure storage."""
        try:
            keyring.set_password(SecureKeyManager.APP_NAME, service_name, key)
            return True
        except KeyringError as e:
            logger.error(f"Failed to store key for {service_name}: {e}")
            return False

    @staticmethod
    def prompt_for_key(service_name: str, force_input: bool = False) -> Optional[str]:
        """Prompt user for API key and store it securely."""
        existing_key = None if force_input else SecureKeyManager.get_key(service_name)
        if existing_key:
            return existing_key

        print(f"Please enter your {service_name} API key (input will be hidden):")
        key = getpass.getpass()
        if key:
            SecureKeyManager.set_key(service_name, key)
            return key
        return None

class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    podstudio_dir: Path = Field(Path(DEFAULT_PODSTUDIO_DIR))

    # Synthesis
    aws_region: Optional[str] = None
    speech_provider: SpeechProviderType = SpeechProviderType.POLLY
    language_code: str = "en-US"
    output_format: str = "mp3"
    sample_rate: str = "22050"  # Valid for both neural and standard engines
    prosody_rate: str = "medium"
    max_concurrency: Optional[int] = Field(None, ge=1)

    # Publishing
    storage_backend: StorageBackend = StorageBackend.S3
    podcast_bucket_name: Optional[str] = None
    podcast_key_prefix: str = "podcasts/"
    presigned_url_expiry: int = Field(3600, gt=0)
    public_base_url: Optional[str] = None

    # AI turn generation
    openai_api_key_ref: str = ""
    llm_model: str = "gpt-4o"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 500
    llm_top_p: float = 0.9

    # HTTP server
    server_host: str = "0.0.0.0"
    server_port: int = 8080

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    _paths: Optional[PathManager] = None

    @property
    def paths(self) -> PathManager:
        """Path manager, created on first use so imports never touch the filesystem."""
        if self._paths is None:
            self._paths = PathManager(self.podstudio_dir)
        return self._paths

    def get_openai_api_key(self, prompt_if_missing: bool = False) -> Optional[str]:
        """Get OpenAI API key from the environment or secure storage."""
        env_key = os.environ.get("OPENAI_API_KEY")
        if env_key:
            return env_key

        if self.openai_api_key_ref:
            key = SecureKeyManager.get_key(self.openai_api_key_ref)
            if key:
                return key

        if prompt_if_missing:
            service_name = self.openai_api_key_ref or "openai-api"
            return SecureKeyManager.prompt_for_key(service_name)

        return None

    def setup_logging(self):
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(level)
            file_format = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(file_format)
            root_logger.addHandler(file_handler)

            # Only warnings and errors go to the console when logging to a file
            console_level = logging.WARNING
        else:
            console_level = level

        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(console_handler)

        if self.log_file:
            logger.info(f"Logging to file: {self.log_file}")

# Global settings instance
settings = Settings()
