"""IAddressDataSourceService のインフラストラクチャ実装.

JapaneseAddressesApiClient をラップし、APIレスポンスをドメインの値オブジェクトに変換する。
"""

from __future__ import annotations

from src.domain.value_objects.address_pattern import (
    PrefectureCities,
    TownRecord,
    freeze_prefecture_cities,
    freeze_town_records,
)
from src.infrastructure.external.japanese_addresses_api.client import (
    JapaneseAddressesApiClient,
)


class JapaneseAddressesDataSourceImpl:
    """IAddressDataSourceService の具象実装."""

    def __init__(self, client: JapaneseAddressesApiClient | None = None) -> None:
        self._client = client or JapaneseAddressesApiClient()

    async def fetch_prefectures(self) -> PrefectureCities:
        """都道府県名→市区町村名の列を取得する."""
        return freeze_prefecture_cities(await self._client.get_prefectures())

    async def fetch_towns(self, pref: str, city: str) -> tuple[TownRecord, ...]:
        """町丁目レコードを取得しTownRecordに変換して返す."""
        payloads = await self._client.get_towns(pref, city)
        return freeze_town_records(
            TownRecord.from_dict(payload) for payload in payloads
        )
