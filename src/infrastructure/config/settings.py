"""アプリケーション設定.

環境変数（および見つかれば `.env` ファイル）から設定を読み込む。
"""

from __future__ import annotations

import logging
import os

from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


logger = logging.getLogger(__name__)

DEFAULT_JAPANESE_ADDRESSES_API = "https://geolonia.github.io/japanese-addresses/api/ja"
DEFAULT_TOWN_CACHE_SIZE = 1000


def find_env_file(start: Path | None = None) -> Path | None:
    """カレントディレクトリから親方向に `.env` を探す."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


ENV_FILE_PATH = find_env_file()


def _parse_positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as e:
        msg = f"{name}は整数でなければなりません: {raw!r}"
        raise ValueError(msg) from e
    if value < 1:
        msg = f"{name}は1以上でなければなりません: {value}"
        raise ValueError(msg)
    return value


@dataclass(frozen=True)
class Settings:
    """設定値.

    Attributes:
        japanese_addresses_api: 住所マスターAPIのベースURL
        town_cache_size: 町丁目パターンキャッシュの最大件数
    """

    japanese_addresses_api: str = DEFAULT_JAPANESE_ADDRESSES_API
    town_cache_size: int = DEFAULT_TOWN_CACHE_SIZE

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> Settings:
        """環境変数から設定を生成する.

        Environment Variables:
            JAPANESE_ADDRESSES_API: 住所マスターAPIのベースURL
            TOWN_CACHE_SIZE: 町丁目パターンキャッシュの最大件数（正の整数）

        Raises:
            ValueError: TOWN_CACHE_SIZE が正の整数でない場合
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)
            logger.debug(f"Loaded env file: {env_file}")

        return cls(
            japanese_addresses_api=os.getenv(
                "JAPANESE_ADDRESSES_API", DEFAULT_JAPANESE_ADDRESSES_API
            ),
            town_cache_size=_parse_positive_int(
                "TOWN_CACHE_SIZE",
                os.getenv("TOWN_CACHE_SIZE", str(DEFAULT_TOWN_CACHE_SIZE)),
            ),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """プロセス共通の設定を取得する."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env(ENV_FILE_PATH)
    return _settings


def reload_settings() -> Settings:
    """環境変数を読み直して設定を再生成する."""
    global _settings
    _settings = Settings.from_env(ENV_FILE_PATH)
    return _settings
