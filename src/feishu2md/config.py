"""Local configuration for feishu2md."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from feishu2md.exceptions import Feishu2mdError

DEFAULT_CACHE_DIR = ".feishu2md_cache"
DEFAULT_CACHE_TTL_SECONDS = 60 * 60
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "feishu2md/0.1"
DEFAULT_IMAGE_DIR = "static"
DEFAULT_CONFIG_PATH = "~/.config/feishu2md/config.json"

FEISHU2MD_APP_ID = os.getenv("FEISHU2MD_APP_ID", "")
FEISHU2MD_APP_SECRET = os.getenv("FEISHU2MD_APP_SECRET", "")
FEISHU2MD_CONFIG_PATH = Path(os.getenv("FEISHU2MD_CONFIG_PATH", DEFAULT_CONFIG_PATH)).expanduser()
# Local-only cache directory for fetched block listings.
FEISHU2MD_CACHE_PATH = Path(os.getenv("FEISHU2MD_CACHE_PATH", DEFAULT_CACHE_DIR)).expanduser().resolve()
FEISHU2MD_CACHE_TTL_SECONDS = int(os.getenv("FEISHU2MD_CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS)))
FEISHU2MD_FETCH_TIMEOUT_S = float(os.getenv("FEISHU2MD_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
FEISHU2MD_FETCH_MAX_RETRIES = int(os.getenv("FEISHU2MD_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
FEISHU2MD_FETCH_BACKOFF_S = float(os.getenv("FEISHU2MD_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
FEISHU2MD_USER_AGENT = os.getenv("FEISHU2MD_USER_AGENT", DEFAULT_USER_AGENT)
FEISHU2MD_IMAGE_DIR = os.getenv("FEISHU2MD_IMAGE_DIR", DEFAULT_IMAGE_DIR)


class FeishuConfig(BaseModel):
    """App credentials for the Open API."""

    app_id: str = ""
    app_secret: str = ""


class OutputConfig(BaseModel):
    """Output preferences shared by the CLI and the pipeline."""

    image_dir: str = DEFAULT_IMAGE_DIR
    title_as_filename: bool = False
    use_html_tags: bool = False
    skip_img_download: bool = False


class AppConfig(BaseModel):
    """Contents of the JSON config file."""

    feishu: FeishuConfig = Field(default_factory=FeishuConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(path: Path | None = None) -> AppConfig:
    """Load the JSON config file and overlay environment credentials.

    A missing file yields the defaults. ``FEISHU2MD_IMAGE_DIR`` applies unless
    the file sets ``output.image_dir``. Credentials from ``FEISHU2MD_APP_ID``
    and ``FEISHU2MD_APP_SECRET`` win over the file.

    Raises:
        Feishu2mdError: If the file exists but is not valid JSON or does not
            match the expected shape.
    """
    config_path = path or FEISHU2MD_CONFIG_PATH
    config = AppConfig(output=OutputConfig(image_dir=FEISHU2MD_IMAGE_DIR))
    if config_path.is_file():
        try:
            raw = json.loads(config_path.read_text(encoding="utf-8"))
            config = AppConfig.model_validate(raw)
        except (json.JSONDecodeError, ValidationError) as exc:
            raise Feishu2mdError(f"Invalid config file {config_path}: {exc}") from exc
        if "image_dir" not in config.output.model_fields_set:
            config = config.model_copy(
                update={"output": config.output.model_copy(update={"image_dir": FEISHU2MD_IMAGE_DIR})}
            )

    updates = {}
    if FEISHU2MD_APP_ID:
        updates["app_id"] = FEISHU2MD_APP_ID
    if FEISHU2MD_APP_SECRET:
        updates["app_secret"] = FEISHU2MD_APP_SECRET
    if updates:
        config = config.model_copy(update={"feishu": config.feishu.model_copy(update=updates)})
    return config
