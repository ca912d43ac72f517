"""住所正規表現パターン CLI コマンド."""

from src.interfaces.cli.commands.address_patterns.show_patterns import (
    cities,
    prefectures,
    towns,
)


__all__ = ["cities", "prefectures", "towns"]
