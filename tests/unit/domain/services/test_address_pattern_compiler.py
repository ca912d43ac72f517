"""住所パターン生成サービスのテスト."""

import re

import pytest

from src.domain.services.address_pattern_compiler import (
    AddressPatternCompiler,
    sort_by_name_length,
)
from src.domain.value_objects.address_pattern import TownRecord


@pytest.fixture()
def compiler() -> AddressPatternCompiler:
    return AddressPatternCompiler()


class TestSortByNameLength:
    """文字数降順ソートのテスト."""

    def test_descending_and_stable(self) -> None:
        names = ["中央区", "港区", "北区", "千代田区", "新宿区"]
        assert sort_by_name_length(names, key=lambda n: n) == [
            "千代田区",
            "中央区",
            "新宿区",
            "港区",
            "北区",
        ]


class TestCompilePrefecturePatterns:
    """都道府県パターンのテスト."""

    def test_pattern_format(self, compiler: AddressPatternCompiler) -> None:
        patterns = compiler.compile_prefecture_patterns(["東京都", "青森県"])

        assert [p.as_tuple() for p in patterns] == [
            ("東京都", "^東京(都|道|府|県)?"),
            ("青森県", "^青森(都|道|府|県)?"),
        ]

    @pytest.mark.parametrize(
        ("pref", "short"),
        [
            ("東京都", "東京"),
            ("北海道", "北海"),
            ("大阪府", "大阪"),
            ("神奈川県", "神奈川"),
        ],
    )
    def test_matches_with_and_without_suffix(
        self, compiler: AddressPatternCompiler, pref: str, short: str
    ) -> None:
        """接尾辞あり・なしの両方に一致する."""
        (entry,) = compiler.compile_prefecture_patterns([pref])

        assert re.match(entry.pattern, pref)
        assert re.match(entry.pattern, short)

    def test_keeps_input_order(self, compiler: AddressPatternCompiler) -> None:
        prefs = ["北海道", "青森県", "神奈川県"]
        patterns = compiler.compile_prefecture_patterns(prefs)
        assert [p.source for p in patterns] == prefs


class TestCompileCityPatterns:
    """市区町村パターンのテスト."""

    def test_sorted_by_length_descending(
        self, compiler: AddressPatternCompiler
    ) -> None:
        """文字数の降順、同じ長さは入力順."""
        cities = ["港区", "千代田区", "西多摩郡奥多摩町", "八王子市"]

        patterns = compiler.compile_city_patterns("東京都", cities)

        assert [p.source for p in patterns] == [
            "西多摩郡奥多摩町",
            "千代田区",
            "八王子市",
            "港区",
        ]
        # 入力リストは変更しない
        assert cities == ["港区", "千代田区", "西多摩郡奥多摩町", "八王子市"]

    def test_patterns_are_anchored_and_normalized(
        self, compiler: AddressPatternCompiler
    ) -> None:
        patterns = dict(
            p.as_tuple()
            for p in compiler.compile_city_patterns("東京都", ["千代田区", "八王子市"])
        )

        assert patterns["千代田区"] == "^千代田(區|区)"
        assert patterns["八王子市"] == "^[ハ八]王子市"

    def test_county_optional_for_town(self, compiler: AddressPatternCompiler) -> None:
        """町村は郡名を省略しても一致する."""
        (entry,) = compiler.compile_city_patterns("東京都", ["西多摩郡奥多摩町"])

        assert entry.pattern == "^(西多摩郡)?(奧|奥)多摩町"
        assert re.match(entry.pattern, "西多摩郡奥多摩町")
        assert re.match(entry.pattern, "奥多摩町")

    def test_county_optional_for_village(
        self, compiler: AddressPatternCompiler
    ) -> None:
        (entry,) = compiler.compile_city_patterns("東京都", ["西多摩郡檜原村"])

        assert re.match(entry.pattern, "西多摩郡檜原村")
        assert re.match(entry.pattern, "檜原村")
        assert re.match(entry.pattern, "桧原村")

    def test_county_kept_for_city(self, compiler: AddressPatternCompiler) -> None:
        """市は郡の省略規則の対象外."""
        (entry,) = compiler.compile_city_patterns("福島県", ["郡山市"])

        assert entry.pattern == "^郡山市"


class TestCompileTownPatterns:
    """町丁目パターンのテスト."""

    def test_sorted_by_town_length(self, compiler: AddressPatternCompiler) -> None:
        towns = [TownRecord("本町"), TownRecord("本町一丁目"), TownRecord("元町")]

        patterns = compiler.compile_town_patterns("東京都", "中野区", towns)

        assert [p.source.town for p in patterns] == ["本町一丁目", "本町", "元町"]

    def test_source_record_is_kept(self, compiler: AddressPatternCompiler) -> None:
        record = TownRecord(town="青木", koaza="", lat="35.1", lng="139.1")

        (entry,) = compiler.compile_town_patterns("埼玉県", "川口市", [record])

        assert entry.source is record

    def test_oaza_optional(self, compiler: AddressPatternCompiler) -> None:
        """大字の有無どちらにも一致する."""
        (entry,) = compiler.compile_town_patterns(
            "埼玉県", "川口市", [TownRecord("大字青木")]
        )

        assert entry.pattern == "^(大?字)?青木"
        for target in ["大字青木", "字青木", "青木"]:
            assert re.match(entry.pattern, target), target

    def test_chome_numerals(self, compiler: AddressPatternCompiler) -> None:
        (entry,) = compiler.compile_town_patterns(
            "東京都", "千代田区", [TownRecord("丸の内一丁目")]
        )

        for target in ["丸の内一丁目", "丸の内1丁目", "丸ノ内１丁目", "丸の内1-2-3"]:
            assert re.match(entry.pattern, target), target
        assert not re.match(entry.pattern, "丸の内1")

    def test_anchored_for_ordinary_city(
        self, compiler: AddressPatternCompiler
    ) -> None:
        """通常の市区町村は先頭一致のみ."""
        (entry,) = compiler.compile_town_patterns(
            "北海道", "札幌市中央区", [TownRecord("大通西")]
        )

        assert entry.pattern.startswith("^")
        assert re.search(entry.pattern, "大通西")
        assert not re.search(entry.pattern, "中央区大通西")

    def test_unanchored_for_kyoto_city(
        self, compiler: AddressPatternCompiler
    ) -> None:
        """京都市は前に通り名が付いても一致する."""
        (entry,) = compiler.compile_town_patterns(
            "京都府", "京都市中京区", [TownRecord("山伏山町")]
        )

        assert not entry.pattern.startswith("^")
        assert re.search(entry.pattern, "室町通蛸薬師下る山伏山町")
        assert re.search(entry.pattern, "山伏山町")
