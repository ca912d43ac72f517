"""住所マスターデータソースのインターフェース."""

from __future__ import annotations

from typing import Protocol

from src.domain.value_objects.address_pattern import (
    AddressUnitName,
    PrefectureCities,
    TownRecord,
)


class IAddressDataSourceService(Protocol):
    """住所マスター（都道府県・市区町村・町丁目）を取得するサービスのインターフェース."""

    async def fetch_prefectures(self) -> PrefectureCities:
        """都道府県名→市区町村名の列の対応を取得する."""
        ...

    async def fetch_towns(
        self, pref: AddressUnitName, city: AddressUnitName
    ) -> tuple[TownRecord, ...]:
        """市区町村内の町丁目レコードを取得する.

        Args:
            pref: 都道府県名
            city: 市区町村名

        Returns:
            町丁目レコードの列（住所マスターの記載順）
        """
        ...
