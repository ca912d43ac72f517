"""Japanese Addresses API のレスポンス型定義."""

from __future__ import annotations

from typing import TypedDict


# GET {base}.json: 都道府県名 → 市区町村名のリスト
PrefectureListResponse = dict[str, list[str]]


class TownPayload(TypedDict, total=False):
    """GET {base}/{都道府県}/{市区町村}.json の個別レコード."""

    town: str
    koaza: str
    lat: str | float | None
    lng: str | float | None


TownListResponse = list[TownPayload]
