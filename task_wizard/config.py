"""
Runtime configuration, read from the environment and an optional .env file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class WizardConfig:
    """Configuration for the wizard CLI and web app."""
    # Project/task store
    task_store_url: str = ""
    task_store_token: str = ""
    task_store_timeout: float = 30

    # Where saved sessions are written
    output_dir: str = "./outputs"

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # text or json

    @property
    def task_store_configured(self) -> bool:
        return bool(self.task_store_url)


def load_env_file(path: Optional[Path] = None) -> None:
    """Load KEY=VALUE lines into os.environ without overriding set values."""
    env_path = path or Path.cwd() / ".env"
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, _, value = line.partition("=")
            os.environ.setdefault(key.strip(), value.strip().strip('"').strip("'"))


def load_config(env_file: Optional[Path] = None) -> WizardConfig:
    load_env_file(env_file)
    try:
        timeout = float(os.environ.get("TASK_STORE_TIMEOUT", "30"))
    except ValueError:
        timeout = 30
    return WizardConfig(
        task_store_url=os.environ.get("TASK_STORE_URL", "").strip(),
        task_store_token=os.environ.get("TASK_STORE_TOKEN", "").strip(),
        task_store_timeout=timeout,
        output_dir="/tmp" if os.environ.get("VERCEL") else os.environ.get("WIZARD_OUTPUT_DIR", "./outputs"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        log_format=os.environ.get("LOG_FORMAT", "text").lower(),
    )
