"""
Bot Settings Accessors

Read-only view the bot consumes. Store-backed values go through
ConfigStore.get_setting with a fixed fallback; the rest come straight
from the process environment.
"""

from hybrid_config.common.config import EnvironmentConfig
from hybrid_config.services.config.service import ConfigStore


class BotSettings:
    """Named accessors over a ConfigStore and the environment"""

    def __init__(self, store: ConfigStore, env: EnvironmentConfig | None = None):
        self.store = store
        self.env = env or EnvironmentConfig()

    def _get(self, key: str, fallback: str) -> str:
        return self.store.get_setting(key, fallback)

    # Store-backed settings

    @property
    def auto_read_status(self) -> str:
        return self._get("AUTO_READ_STATUS", "yes")

    @property
    def auto_download_status(self) -> str:
        return self._get("AUTO_DOWNLOAD_STATUS", "no")

    @property
    def auto_reply_status(self) -> str:
        return self._get("AUTO_REPLY_STATUS", "no")

    @property
    def mode(self) -> str:
        """Public/private mode (PUBLIC_MODE)"""
        return self._get("PUBLIC_MODE", "no")

    @property
    def presence(self) -> str:
        return self._get("PRESENCE", "")

    @property
    def chatbot(self) -> str:
        return self._get("CHATBOT", "no")

    @property
    def audio_chatbot(self) -> str:
        return self._get("AUDIO_CHATBOT", "no")

    @property
    def starting_bot_message(self) -> str:
        return self._get("STARTING_BOT_MESSAGE", "yes")

    @property
    def antidelete_recover_convention(self) -> str:
        return self._get("ANTIDELETE_RECOVER_CONVENTION", "no")

    @property
    def antidelete_sent_inbox(self) -> str:
        return self._get("ANTIDELETE_SENT_INBOX", "yes")

    @property
    def goodbye_message(self) -> str:
        return self._get("GOODBYE_MESSAGE", "no")

    @property
    def welcome_message(self) -> str:
        return self._get("WELCOME_MESSAGE", "no")

    @property
    def auto_reject_call(self) -> str:
        return self._get("AUTO_REJECT_CALL", "no")

    # Same key, older name used by call handling
    anticall = auto_reject_call

    @property
    def group_antilink(self) -> str:
        return self._get("GROUPANTILINK", "no")

    @property
    def auto_react(self) -> str:
        return self._get("AUTO_REACT", "no")

    @property
    def auto_react_status(self) -> str:
        return self._get("AUTO_REACT_STATUS", "yes")

    @property
    def auto_read(self) -> str:
        return self._get("AUTO_READ", "no")

    @property
    def auto_bio(self) -> str:
        return self._get("AUTO_BIO", "no")

    @property
    def session_id(self) -> str:
        return self.store.get_session_id()

    # Environment-only settings

    @property
    def prefix(self) -> str:
        return self.env.prefix

    @property
    def owner_name(self) -> str:
        return self.env.owner_name

    @property
    def owner_number(self) -> str:
        return self.env.owner_number

    @property
    def bot_name(self) -> str:
        return self.env.bot_name

    @property
    def warn_count(self) -> str:
        return self.env.warn_count

    @property
    def pm_permit(self) -> str:
        return self.env.pm_permit

    @property
    def group_antilink_delete_only(self) -> str:
        return self.env.groupantilink_delete_only

    @property
    def status_react_emojis(self) -> str:
        return self.env.status_react_emojis

    @property
    def reply_status_text(self) -> str:
        return self.env.reply_status_text

    @property
    def auto_reply(self) -> str:
        return self.env.auto_reply

    @property
    def auto_save_contacts(self) -> str:
        return self.env.auto_save_contacts

    @property
    def audio_reply(self) -> str:
        return self.env.audio_reply

    @property
    def bot_urls(self) -> list[str]:
        return self.env.bot_urls

    @property
    def footer(self) -> str:
        return self.env.footer

    @property
    def database_url(self) -> str:
        return self.env.resolved_database_url

    @property
    def menu(self) -> dict[str, str]:
        """Menu decoration strings keyed by position"""
        return {
            "top_left": self.env.menu_top_left,
            "bot_name_line": self.env.menu_bot_name_line,
            "bottom_left": self.env.menu_bottom_left,
            "greeting_line": self.env.menu_greeting_line,
            "divider": self.env.menu_divider,
            "user_line": self.env.menu_user_line,
            "date_line": self.env.menu_date_line,
            "time_line": self.env.menu_time_line,
            "stats_line": self.env.menu_stats_line,
            "bottom_divider": self.env.menu_bottom_divider,
        }
