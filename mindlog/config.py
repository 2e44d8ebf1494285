"""Configuration for MindLog calendar export."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from mindlog.constants import APP_NAME, CALENDAR_NAME, STORE_FILENAME, UID_DOMAIN


class MindLogConfig(BaseModel):
    """MindLog configuration with Pydantic validation."""

    # Storage paths
    data_dir: Path = Field(default=Path("data"))
    export_dir: Path = Field(default=Path("data/exports"))
    log_dir: Path = Field(default=Path("logs"))

    # File naming
    store_filename: str = Field(default=STORE_FILENAME)
    log_filename: str = Field(default="mindlog.log")

    # Calendar identity
    app_name: str = Field(default=APP_NAME)
    uid_domain: str = Field(default=UID_DOMAIN)
    calendar_name: str = Field(default=CALENDAR_NAME)

    # CLI defaults
    ls_default_limit: int = Field(default=20, ge=1)

    @property
    def store_path(self) -> Path:
        """Location of the durable event store."""
        return self.data_dir / self.store_filename

    @property
    def log_path(self) -> Path:
        """Location of the CLI log file."""
        return self.log_dir / self.log_filename

    @classmethod
    def from_env(cls) -> "MindLogConfig":
        """Load configuration from environment variables and .env file."""
        load_dotenv()

        config_dict = {}

        # Storage paths
        if "MINDLOG_DATA_DIR" in os.environ:
            config_dict["data_dir"] = Path(os.environ["MINDLOG_DATA_DIR"])
        if "MINDLOG_EXPORT_DIR" in os.environ:
            config_dict["export_dir"] = Path(os.environ["MINDLOG_EXPORT_DIR"])
        if "MINDLOG_LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["MINDLOG_LOG_DIR"])

        # File naming
        if "MINDLOG_STORE_FILENAME" in os.environ:
            config_dict["store_filename"] = os.environ["MINDLOG_STORE_FILENAME"]
        if "MINDLOG_LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["MINDLOG_LOG_FILENAME"]

        # Calendar identity
        if "MINDLOG_UID_DOMAIN" in os.environ:
            config_dict["uid_domain"] = os.environ["MINDLOG_UID_DOMAIN"]
        if "MINDLOG_CALENDAR_NAME" in os.environ:
            config_dict["calendar_name"] = os.environ["MINDLOG_CALENDAR_NAME"]

        # CLI defaults
        if "MINDLOG_LS_LIMIT" in os.environ:
            try:
                config_dict["ls_default_limit"] = int(os.environ["MINDLOG_LS_LIMIT"])
            except ValueError:
                pass  # Keep default if invalid

        return cls(**config_dict)
