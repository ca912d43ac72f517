"""Japanese Addresses API クライアントパッケージ."""

from .client import JapaneseAddressesApiClient, JapaneseAddressesApiError
from .service import JapaneseAddressesDataSourceImpl
from .types import PrefectureListResponse, TownListResponse, TownPayload


__all__ = [
    "JapaneseAddressesApiClient",
    "JapaneseAddressesApiError",
    "JapaneseAddressesDataSourceImpl",
    "PrefectureListResponse",
    "TownListResponse",
    "TownPayload",
]
