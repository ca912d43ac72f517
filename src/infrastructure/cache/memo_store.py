"""メモ化用のインメモリキャッシュ.

キーごとに「キャッシュ確認 → なければ計算 → 保存」を行う共通の仕組みと、
保持ポリシーの異なるストアを提供する。

- UnboundedMemoStore: 上限なし・期限なし（プロセス終了まで保持）
- LruTtlMemoStore: 最大件数を超えたら最も長く使われていないものを削除し、
  さらに登録からの経過時間で期限切れにする

ロックは使わない。同じキーへの同時アクセスで両方がキャッシュミスした場合は
両方が計算し、後から保存した方が残る。
"""

from __future__ import annotations

import logging
import time

from collections import OrderedDict
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar


logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class MemoStore(Protocol[K, V]):
    """メモ化ストアのインターフェース."""

    def get(self, key: K) -> V | None:
        """値を取得する（なければNone）."""
        ...

    def set(self, key: K, value: V) -> None:
        """値を保存する."""
        ...

    def __len__(self) -> int: ...


@dataclass(frozen=True)
class CacheInfo:
    """ストアの統計情報."""

    size: int
    hits: int
    misses: int
    evictions: int = 0


class UnboundedMemoStore(Generic[K, V]):
    """上限・期限なしのメモ化ストア."""

    def __init__(self) -> None:
        self._entries: dict[K, V] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: K) -> V | None:
        if key not in self._entries:
            self.misses += 1
            return None
        self.hits += 1
        return self._entries[key]

    def set(self, key: K, value: V) -> None:
        self._entries[key] = value

    def info(self) -> CacheInfo:
        return CacheInfo(size=len(self), hits=self.hits, misses=self.misses)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class LruTtlMemoStore(Generic[K, V]):
    """最大件数（LRU）と有効期限（TTL）を持つメモ化ストア."""

    def __init__(
        self,
        max_size: int,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """初期化.

        Args:
            max_size: 最大エントリ数
            ttl_seconds: 登録からの有効期限（秒）
            clock: 現在時刻（秒）を返す関数

        Raises:
            ValueError: max_size が1未満、または ttl_seconds が0以下の場合
        """
        if max_size < 1:
            msg = f"max_sizeは1以上でなければなりません: {max_size}"
            raise ValueError(msg)
        if ttl_seconds <= 0:
            msg = f"ttl_secondsは正の値でなければなりません: {ttl_seconds}"
            raise ValueError(msg)

        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # キー → (有効期限, 値)。末尾ほど最近使用したもの
        self._entries: OrderedDict[K, tuple[float, V]] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: K) -> V | None:
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            self.misses += 1
            logger.debug("キャッシュ期限切れ: %s", key)
            return None

        # LRU: 最近使用したエントリを末尾に移動
        self._entries.move_to_end(key)
        self.hits += 1
        return value

    def set(self, key: K, value: V) -> None:
        now = self._clock()
        self._entries[key] = (now + self.ttl_seconds, value)
        self._entries.move_to_end(key)
        if len(self._entries) > self.max_size:
            self._drop_expired(now)
        while len(self._entries) > self.max_size:
            oldest_key, _ = self._entries.popitem(last=False)
            self.evictions += 1
            logger.debug("キャッシュエビクション: %s", oldest_key)

    def _drop_expired(self, now: float) -> None:
        """期限切れのエントリを削除する（エビクションには数えない）."""
        expired = [
            key for key, (expires_at, _) in self._entries.items() if now >= expires_at
        ]
        for key in expired:
            del self._entries[key]

    def info(self) -> CacheInfo:
        return CacheInfo(
            size=len(self),
            hits=self.hits,
            misses=self.misses,
            evictions=self.evictions,
        )

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[call-overload]
        return entry is not None and self._clock() < entry[0]

    def __len__(self) -> int:
        """期限切れで未削除のエントリは数えない."""
        now = self._clock()
        return sum(1 for expires_at, _ in self._entries.values() if now < expires_at)


async def get_or_compute(
    store: MemoStore[K, V],
    key: K,
    compute: Callable[[], Awaitable[V]],
) -> V:
    """キャッシュにあればそれを返し、なければ計算して保存する.

    compute が例外を送出した場合は何も保存せずにそのまま伝播する。
    """
    cached = store.get(key)
    if cached is not None:
        return cached

    logger.debug("キャッシュミス: %s", key)
    value = await compute()
    store.set(key, value)
    return value
