"""住所マスターのレコードから階層別の正規表現パターン列を生成するサービス."""

from __future__ import annotations

import re

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from src.domain.services.address_regex_normalizer import AddressRegexNormalizer
from src.domain.value_objects.address_pattern import (
    AddressUnitName,
    CityPatternSet,
    PrefecturePatternSet,
    RegexPatternEntry,
    TownPatternSet,
    TownRecord,
)


T = TypeVar("T")

# 都道府県名の末尾の接尾辞
PREFECTURE_SUFFIXES: tuple[str, ...] = ("都", "道", "府", "県")
_PREFECTURE_SUFFIX_RE = re.compile(f"({'|'.join(PREFECTURE_SUFFIXES)})$")
_OPTIONAL_PREFECTURE_SUFFIX = f"({'|'.join(PREFECTURE_SUFFIXES)})?"

# 郡が省略されうる町村
_TOWN_OR_VILLAGE_RE = re.compile("(町|村)$")
_COUNTY_RE = re.compile("(.+?)郡")

# 京都市の町名は「上ル」「下ル」等の通り名が前に付くため先頭一致にしない
KYOTO_CITY_PREFIX = "京都市"


def sort_by_name_length(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """名前の文字数の降順に並べる（同じ長さなら元の順序を保つ）.

    短い地名が長い地名の一部に誤って一致しないようにするため。
    """
    return sorted(items, key=lambda item: len(key(item)), reverse=True)


class AddressPatternCompiler:
    """都道府県・市区町村・町丁目の正規表現パターン生成サービス."""

    def __init__(self, normalizer: AddressRegexNormalizer | None = None) -> None:
        self._normalizer = normalizer or AddressRegexNormalizer()

    def compile_prefecture_patterns(
        self, prefectures: Sequence[AddressUnitName]
    ) -> PrefecturePatternSet:
        """都道府県名のパターン列を生成する.

        `東京` のように末尾の `都道府県` が抜けた住所にも一致させる。

        例:
            "東京都" → "^東京(都|道|府|県)?"
        """
        return tuple(
            RegexPatternEntry(
                pref,
                f"^{re.escape(_PREFECTURE_SUFFIX_RE.sub('', pref))}"
                f"{_OPTIONAL_PREFECTURE_SUFFIX}",
            )
            for pref in prefectures
        )

    def compile_city_patterns(
        self, pref: AddressUnitName, cities: Sequence[AddressUnitName]
    ) -> CityPatternSet:
        """市区町村名のパターン列を文字数の降順で生成する.

        町村名の場合は郡名を省略可能にする。

        例:
            "西多摩郡奥多摩町" → "^(西多摩郡)?奥多摩町"
        """
        patterns = []
        for city in sort_by_name_length(cities, key=lambda name: name):
            pattern = self._normalizer.to_regex_pattern(city)
            if _TOWN_OR_VILLAGE_RE.search(city):
                pattern = _COUNTY_RE.sub(r"(\1郡)?", pattern, count=1)
            patterns.append(RegexPatternEntry(city, f"^{pattern}"))
        return tuple(patterns)

    def compile_town_patterns(
        self,
        pref: AddressUnitName,
        city: AddressUnitName,
        towns: Sequence[TownRecord],
    ) -> TownPatternSet:
        """町丁目のパターン列を町丁目名の文字数の降順で生成する.

        京都市の町丁目は先頭一致にしない（`re.search` で任意の位置に一致させる）。

        Args:
            pref: 都道府県名
            city: 市区町村名
            towns: 町丁目レコードのリスト

        Returns:
            (町丁目レコード, パターン) の組の列
        """
        anchor = "" if city.startswith(KYOTO_CITY_PREFIX) else "^"
        return tuple(
            RegexPatternEntry(
                town, f"{anchor}{self._normalizer.to_town_regex_pattern(town.town)}"
            )
            for town in sort_by_name_length(towns, key=lambda record: record.town)
        )
