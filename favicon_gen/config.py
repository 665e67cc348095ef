import json
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/favicon_config.json"

TRUE_VALUES = {"1", "true", "yes", "on"}


class Config:
    _instance = None  # Singleton instance

    def __new__(cls, config_path=DEFAULT_CONFIG_PATH):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance.config_path = config_path
            cls._instance._load_config()
        return cls._instance

    @classmethod
    def reset(cls):
        """Forget the loaded instance so the next Config() reloads."""
        cls._instance = None

    def _load_config(self):
        """Loads configuration from .env and the JSON config file."""
        load_dotenv()
        self.settings = {}
        try:
            with open(self.config_path, "r", encoding="utf-8") as file:
                self.settings.update(json.load(file))
        except FileNotFoundError:
            logger.warning(f"{self.config_path} not found, using defaults.")

    def get(self, key, default=None):
        """Get a config value from settings or environment variables."""
        return self.settings.get(key, os.getenv(key, default))

    def get_bool(self, key, default=False):
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in TRUE_VALUES

    def get_int(self, key, default=None):
        value = self.get(key)
        if value is None or value == "":
            return default
        return int(value)

    def get_json(self, key, default=None):
        """Get a value that is either already structured or a JSON string (from env)."""
        value = self.get(key)
        if value is None or value == "":
            return default
        if isinstance(value, str):
            return json.loads(value)
        return value
