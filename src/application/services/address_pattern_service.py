"""住所正規表現パターン取得サービス.

都道府県・市区町村・町丁目の各階層について、住所マスターの取得と
正規表現パターン列の生成をキャッシュ付きで行う。

| 階層 | キー | 保持ポリシー |
|---|---|---|
| 都道府県 | なし（1件のみ） | プロセス終了まで |
| 市区町村 | 都道府県名 | プロセス終了まで |
| 町丁目 | 「都道府県名-市区町村名」 | 最大件数（LRU）＋7日間 |

住所マスター自体も都道府県一覧・町丁目一覧ごとにキャッシュし、
一度取得したキーは再取得しない。
"""

from __future__ import annotations

import logging

from dataclasses import dataclass

from src.domain.services.address_pattern_compiler import AddressPatternCompiler
from src.domain.services.interfaces.address_data_source_service import (
    IAddressDataSourceService,
)
from src.domain.value_objects.address_pattern import (
    AddressUnitName,
    CityPatternSet,
    PrefectureCities,
    PrefecturePatternSet,
    TownPatternSet,
    TownRecord,
    freeze_prefecture_cities,
    freeze_town_records,
)
from src.infrastructure.cache.memo_store import (
    CacheInfo,
    LruTtlMemoStore,
    UnboundedMemoStore,
    get_or_compute,
)
from src.infrastructure.config.settings import DEFAULT_TOWN_CACHE_SIZE


logger = logging.getLogger(__name__)

# 町丁目パターンの有効期限（7日間）
TOWN_PATTERN_TTL_SECONDS = 60 * 60 * 24 * 7

_PREFECTURES_KEY = "prefectures"


class UnknownPrefectureError(LookupError):
    """住所マスターに存在しない都道府県名が指定された."""

    def __init__(self, pref: str) -> None:
        super().__init__(f"都道府県が見つかりません: {pref}")
        self.pref = pref


def town_cache_key(pref: AddressUnitName, city: AddressUnitName) -> str:
    """町丁目キャッシュのキー."""
    return f"{pref}-{city}"


@dataclass(frozen=True)
class AddressPatternCacheInfo:
    """各キャッシュの統計情報."""

    prefectures: CacheInfo
    towns: CacheInfo
    prefecture_patterns: CacheInfo
    city_patterns: CacheInfo
    town_patterns: CacheInfo


class AddressPatternService:
    """住所正規表現パターン取得サービス."""

    def __init__(
        self,
        data_source: IAddressDataSourceService,
        compiler: AddressPatternCompiler | None = None,
        town_cache_size: int = DEFAULT_TOWN_CACHE_SIZE,
        town_cache_ttl_seconds: float = TOWN_PATTERN_TTL_SECONDS,
    ) -> None:
        self._data_source = data_source
        self._compiler = compiler or AddressPatternCompiler()

        # 住所マスター
        self._prefectures: UnboundedMemoStore[str, PrefectureCities] = (
            UnboundedMemoStore()
        )
        self._towns: UnboundedMemoStore[str, tuple[TownRecord, ...]] = (
            UnboundedMemoStore()
        )

        # 正規表現パターン
        self._prefecture_patterns: UnboundedMemoStore[str, PrefecturePatternSet] = (
            UnboundedMemoStore()
        )
        self._city_patterns: UnboundedMemoStore[str, CityPatternSet] = (
            UnboundedMemoStore()
        )
        self._town_patterns: LruTtlMemoStore[str, TownPatternSet] = LruTtlMemoStore(
            max_size=town_cache_size, ttl_seconds=town_cache_ttl_seconds
        )

    async def get_prefectures(self) -> PrefectureCities:
        """都道府県名→市区町村名の列を取得する（初回のみ取得）.

        返す対応は読み取り専用で、キャッシュ済みのパターンの元データと共有される。
        """

        async def fetch() -> PrefectureCities:
            return freeze_prefecture_cities(await self._data_source.fetch_prefectures())

        return await get_or_compute(self._prefectures, _PREFECTURES_KEY, fetch)

    async def get_towns(
        self, pref: AddressUnitName, city: AddressUnitName
    ) -> tuple[TownRecord, ...]:
        """町丁目レコードを取得する（キーごとに初回のみ取得）."""

        async def fetch() -> tuple[TownRecord, ...]:
            return freeze_town_records(await self._data_source.fetch_towns(pref, city))

        return await get_or_compute(self._towns, town_cache_key(pref, city), fetch)

    async def get_prefecture_patterns(self) -> PrefecturePatternSet:
        """都道府県のパターン列を取得する."""

        async def compile_patterns() -> PrefecturePatternSet:
            prefectures = await self.get_prefectures()
            patterns = self._compiler.compile_prefecture_patterns(list(prefectures))
            logger.debug(f"都道府県パターン生成: {len(patterns)}件")
            return patterns

        return await get_or_compute(
            self._prefecture_patterns, _PREFECTURES_KEY, compile_patterns
        )

    async def get_city_patterns(self, pref: AddressUnitName) -> CityPatternSet:
        """都道府県内の市区町村のパターン列を取得する.

        Raises:
            UnknownPrefectureError: 住所マスターに存在しない都道府県名の場合
        """

        async def compile_patterns() -> CityPatternSet:
            prefectures = await self.get_prefectures()
            if pref not in prefectures:
                raise UnknownPrefectureError(pref)
            patterns = self._compiler.compile_city_patterns(pref, prefectures[pref])
            logger.debug(f"市区町村パターン生成: {pref} {len(patterns)}件")
            return patterns

        return await get_or_compute(self._city_patterns, pref, compile_patterns)

    async def get_town_patterns(
        self, pref: AddressUnitName, city: AddressUnitName
    ) -> TownPatternSet:
        """市区町村内の町丁目のパターン列を取得する."""

        async def compile_patterns() -> TownPatternSet:
            towns = await self.get_towns(pref, city)
            patterns = self._compiler.compile_town_patterns(pref, city, towns)
            logger.debug(f"町丁目パターン生成: {pref}{city} {len(patterns)}件")
            return patterns

        return await get_or_compute(
            self._town_patterns, town_cache_key(pref, city), compile_patterns
        )

    def cache_info(self) -> AddressPatternCacheInfo:
        """各キャッシュの統計情報を返す."""
        return AddressPatternCacheInfo(
            prefectures=self._prefectures.info(),
            towns=self._towns.info(),
            prefecture_patterns=self._prefecture_patterns.info(),
            city_patterns=self._city_patterns.info(),
            town_patterns=self._town_patterns.info(),
        )
