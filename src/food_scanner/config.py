"""Configuration handling for the Discord Food Scanner."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

import yaml

from .providers.vision_analyzer import DEFAULT_BASE_URL, DEFAULT_MODEL


@dataclass
class Config:
    """Configuration settings for the bot.

    Attributes:
        bot_token: Discord bot token.
        command_prefix: Prefix that marks a message as a command.
        request_timeout_seconds: Maximum wait for a Discord send or edit.
        ai_api_key: API key for the vision model endpoint.
        ai_model: Vision model name.
        ai_base_url: OpenAI-compatible endpoint for the vision model.
        ai_timeout_seconds: Maximum wait for a model answer.
        database_file: SQLite file for saved foods.
        slider_timeout_seconds: Seconds before navigation buttons are
                                disabled (0 = never).
    """

    bot_token: str | None = None
    command_prefix: str = "!"
    request_timeout_seconds: float = 10.0
    ai_api_key: str | None = None
    ai_model: str = DEFAULT_MODEL
    ai_base_url: str | None = DEFAULT_BASE_URL
    ai_timeout_seconds: float = 60.0
    database_file: str = "foods.db"
    slider_timeout_seconds: float = 300.0

    def get_database_path(self) -> str:
        """Get the database file with ~ expanded."""
        if self.database_file == ":memory:":
            return self.database_file
        return str(Path(self.database_file).expanduser())


def load_config(path: str | Path) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Config object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If slider.timeout_seconds is not a number >= 0.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Extract sections
    discord = data.get("discord") or {}
    ai = data.get("ai") or {}
    storage = data.get("storage") or {}
    slider = data.get("slider") or {}

    slider_timeout = slider.get("timeout_seconds", Config.slider_timeout_seconds)
    if isinstance(slider_timeout, bool) or not isinstance(slider_timeout, (int, float)):
        raise ValueError(f"slider.timeout_seconds must be a number, got {slider_timeout!r}")
    if slider_timeout < 0:
        raise ValueError(f"slider.timeout_seconds must be >= 0, got {slider_timeout}")

    return Config(
        bot_token=discord.get("token", Config.bot_token),
        command_prefix=discord.get("command_prefix", Config.command_prefix),
        request_timeout_seconds=discord.get("request_timeout_seconds", Config.request_timeout_seconds),
        ai_api_key=ai.get("api_key", Config.ai_api_key),
        ai_model=ai.get("model", Config.ai_model),
        ai_base_url=ai.get("base_url", Config.ai_base_url),
        ai_timeout_seconds=ai.get("timeout_seconds", Config.ai_timeout_seconds),
        database_file=storage.get("database_file", Config.database_file),
        slider_timeout_seconds=slider_timeout,
    )


def apply_environment(config: Config, environ: Mapping[str, str] | None = None) -> Config:
    """
    Override config values from environment variables.

    Reads BOT_TOKEN, GEMINI_API, AI_MODEL and DB_FILE. Unset or empty
    variables leave the config value unchanged.

    Args:
        config: Base configuration.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        New Config with overrides applied.
    """
    env = os.environ if environ is None else environ
    overrides = {}

    if env.get("BOT_TOKEN"):
        overrides["bot_token"] = env["BOT_TOKEN"]
    if env.get("GEMINI_API"):
        overrides["ai_api_key"] = env["GEMINI_API"]
    if env.get("AI_MODEL"):
        overrides["ai_model"] = env["AI_MODEL"]
    if env.get("DB_FILE"):
        overrides["database_file"] = env["DB_FILE"]

    return replace(config, **overrides)
