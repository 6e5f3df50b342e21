"""
Configuration Definitions

Recognized bot settings with their creation defaults, and the process
environment model (pydantic-settings) for everything the store itself
does not manage.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_VERSION = "1.0.0"
MAX_BACKUPS = 7
DEFAULT_ENV_FILE = "config.env"

# Managed settings and the value used when the environment does not supply one
MANAGED_SETTINGS: dict[str, str] = {
    "AUDIO_CHATBOT": "no",
    "AUTO_BIO": "yes",
    "AUTO_DOWNLOAD_STATUS": "no",
    "AUTO_REACT": "no",
    "AUTO_REACT_STATUS": "yes",
    "AUTO_READ": "yes",
    "AUTO_READ_STATUS": "yes",
    "CHATBOT": "no",
    "PUBLIC_MODE": "yes",
    "STARTING_BOT_MESSAGE": "yes",
    "PRESENCE": "",
    "ANTIDELETE_RECOVER_CONVENTION": "no",
    "ANTIDELETE_SENT_INBOX": "yes",
    "GOODBYE_MESSAGE": "no",
    "AUTO_REJECT_CALL": "no",
    "WELCOME_MESSAGE": "no",
    "GROUPANTILINK": "no",
    "AUTO_REPLY_STATUS": "no",
}

DEFAULT_BOT_URLS = [
    "https://res.cloudinary.com/dptzpfgtm/image/upload/v1748879883/whatsapp_uploads/e3eprzkzxhwfx7pmemr5.jpg",
    "https://res.cloudinary.com/dptzpfgtm/image/upload/v1748879901/whatsapp_uploads/hqagxk84idvf899rhpfj.jpg",
    "https://res.cloudinary.com/dptzpfgtm/image/upload/v1748879921/whatsapp_uploads/bms318aehnllm6sfdgql.jpg",
]


def build_default_settings(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Build the initial settings for a new config document.

    An environment value wins only when it is set and non-empty.
    """
    if environ is None:
        environ = os.environ

    return {
        key: environ.get(key) or default
        for key, default in MANAGED_SETTINGS.items()
    }


def load_environment(env_file: str | Path | None = DEFAULT_ENV_FILE) -> dict[str, str]:
    """
    Merge an optional dotenv file with the process environment.

    Process environment wins over the file.
    """
    merged: dict[str, str] = {}

    if env_file and Path(env_file).exists():
        merged.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})

    merged.update(os.environ)
    return merged


class EnvironmentConfig(BaseSettings):
    """
    Process-level configuration loaded from environment variables.

    Create a config.env file with e.g.:
    - HEROKU_API_KEY=your-platform-token
    - HEROKU_APP_NAME=your-app
    - PORT=3000
    """

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Remote platform
    heroku_api_key: str = ""
    heroku_app_name: str = ""

    # Local storage and control endpoint
    config_dir: str = Field(default="config", validation_alias="HYBRID_CONFIG_DIR")
    port: int = 3000

    # Bot identity
    prefix: str = "."
    owner_name: str = "Eliakim"
    owner_number: str = "254746404008"
    bot_name: str = "ELIAKIM-MD"
    warn_count: str = "3"
    database_url: str = ""

    # Environment-only toggles
    pm_permit: str = "yes"
    groupantilink_delete_only: str = "yes"
    status_react_emojis: str = ""
    reply_status_text: str = ""
    auto_reply: str = "no"
    auto_save_contacts: str = "yes"
    audio_reply: str = "no"

    # Presentation
    bot_url: str = ""
    footer: str = Field(default="\n\n®2025🔥", validation_alias="BOT_FOOTER")
    menu_top_left: str = "┌─❖"
    menu_bot_name_line: str = "│ "
    menu_bottom_left: str = "└┬❖"
    menu_greeting_line: str = "┌┤ "
    menu_divider: str = "│└────────┈⳹"
    menu_user_line: str = "│🕵️ "
    menu_date_line: str = "│📅 "
    menu_time_line: str = "│⏰ "
    menu_stats_line: str = "│⭐ "
    menu_bottom_divider: str = "└─────────────┈⳹"

    @property
    def has_remote_credentials(self) -> bool:
        return bool(self.heroku_api_key and self.heroku_app_name)

    @property
    def bot_urls(self) -> list[str]:
        """Bot image URLs (comma-separated BOT_URL, or the built-in list)."""
        if self.bot_url:
            return [url for url in self.bot_url.split(",") if url]
        return list(DEFAULT_BOT_URLS)

    @property
    def resolved_database_url(self) -> str:
        """DATABASE_URL, or a SQLite file beside the working directory."""
        return self.database_url or str(Path("database.db").resolve())
