"""住所正規表現パターンの値オブジェクト.

住所マスター（都道府県・市区町村・町丁目）のレコードと、
そこから生成した正規表現パターンの組を表す。

住所マスターのレコードは一度取得したら変更しない。キャッシュから
パターンを作り直しても同じ結果になるよう、ここで不変の形に変換する。
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Generic, TypeVar


# 都道府県名・市区町村名・町丁目名（住所マスター由来の生文字列）
AddressUnitName = str

SourceT = TypeVar("SourceT")

# 都道府県名 → 市区町村名の列（住所マスターの記載順）
PrefectureCities = Mapping[AddressUnitName, tuple[AddressUnitName, ...]]


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass(frozen=True)
class TownRecord:
    """町丁目レコード.

    koaza / lat / lng はパターン生成では使用しないが、
    レコードの同一性の一部としてそのまま保持する。
    """

    town: AddressUnitName
    koaza: str = ""
    lat: str | None = None
    lng: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TownRecord:
        """APIレスポンスの1要素からTownRecordを生成する.

        town が欠けたレコードは KeyError になる。
        lat / lng が数値で返された場合は文字列にする。
        """
        return cls(
            town=data["town"],
            koaza=data.get("koaza", ""),
            lat=_optional_str(data.get("lat")),
            lng=_optional_str(data.get("lng")),
        )


def freeze_prefecture_cities(
    prefectures: Mapping[AddressUnitName, Iterable[AddressUnitName]],
) -> PrefectureCities:
    """都道府県→市区町村の対応を読み取り専用のコピーにする."""
    return MappingProxyType(
        {pref: tuple(cities) for pref, cities in prefectures.items()}
    )


def freeze_town_records(towns: Iterable[TownRecord]) -> tuple[TownRecord, ...]:
    """町丁目レコードの列を不変のタプルにする."""
    return tuple(towns)


@dataclass(frozen=True)
class RegexPatternEntry(Generic[SourceT]):
    """元レコードと正規表現パターン文字列の組."""

    source: SourceT
    pattern: str

    def as_tuple(self) -> tuple[SourceT, str]:
        return (self.source, self.pattern)


# 元の名前の文字数の降順（同じ長さなら元の順序）に並んだパターン列
PrefecturePatternSet = tuple[RegexPatternEntry[AddressUnitName], ...]
CityPatternSet = tuple[RegexPatternEntry[AddressUnitName], ...]
TownPatternSet = tuple[RegexPatternEntry[TownRecord], ...]
