"""Japanese Addresses API クライアント.

httpx asyncベースのHTTPクライアントで、都道府県一覧
（`{base}.json`）と町丁目一覧（`{base}/{都道府県}/{市区町村}.json`）に対応。
リトライは行わない（呼び出し側の責務）。
"""

from __future__ import annotations

import logging

from typing import Any
from urllib.parse import quote

import httpx

from .types import PrefectureListResponse, TownListResponse


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://geolonia.github.io/japanese-addresses/api/ja"


class JapaneseAddressesApiError(Exception):
    """Japanese Addresses APIクライアントのエラー."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class JapaneseAddressesApiClient:
    """Japanese Addresses APIクライアント (httpx async)."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._external_client = client
        self._owns_client = client is None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTPクライアントを取得（外部注入 or 自動生成）."""
        if self._external_client is not None:
            return self._external_client
        return httpx.AsyncClient(timeout=30.0)

    def prefectures_url(self) -> str:
        return f"{self._base_url}.json"

    def towns_url(self, pref: str, city: str) -> str:
        return "/".join([self._base_url, quote(pref), quote(city) + ".json"])

    async def get_prefectures(self) -> PrefectureListResponse:
        """都道府県名→市区町村名リストを取得."""
        data: PrefectureListResponse = await self._request(self.prefectures_url())
        return data

    async def get_towns(self, pref: str, city: str) -> TownListResponse:
        """町丁目レコードのリストを取得."""
        data: TownListResponse = await self._request(self.towns_url(pref, city))
        return data

    async def _request(self, url: str) -> Any:
        """APIリクエスト実行."""
        client = await self._get_client()
        logger.info("住所マスター取得: %s", url)

        try:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise JapaneseAddressesApiError(
                f"APIリクエストエラー: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            raise JapaneseAddressesApiError("APIリクエストタイムアウト") from e
        except httpx.HTTPError as e:
            raise JapaneseAddressesApiError(f"HTTPエラー: {e}") from e
        finally:
            if self._owns_client:
                await client.aclose()
