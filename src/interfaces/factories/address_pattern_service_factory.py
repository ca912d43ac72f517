"""住所パターンサービスファクトリー

設定に基づいてAddressPatternServiceと住所マスターAPIクライアントを組み立てます。
"""

import logging

import httpx

from src.application.services.address_pattern_service import AddressPatternService
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.external.japanese_addresses_api.client import (
    JapaneseAddressesApiClient,
)
from src.infrastructure.external.japanese_addresses_api.service import (
    JapaneseAddressesDataSourceImpl,
)


logger = logging.getLogger(__name__)


class AddressPatternServiceFactory:
    """住所パターンサービスファクトリー"""

    @staticmethod
    def create(
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> AddressPatternService:
        """設定からサービスを作成

        Args:
            settings: 設定（省略時は環境変数から読み込んだ設定）
            http_client: 共有するhttpxクライアント（省略時はリクエストごとに生成）

        Returns:
            AddressPatternService: 住所マスターAPIを使うサービス
        """
        settings = settings or get_settings()
        logger.info(
            f"Creating address pattern service: api={settings.japanese_addresses_api}"
            f" town_cache_size={settings.town_cache_size}"
        )
        client = JapaneseAddressesApiClient(
            base_url=settings.japanese_addresses_api, client=http_client
        )
        return AddressPatternService(
            data_source=JapaneseAddressesDataSourceImpl(client=client),
            town_cache_size=settings.town_cache_size,
        )
