"""CLIコマンド共通の基盤."""

import functools
import logging

from collections.abc import Callable
from typing import Any, TypeVar

import click

from src.infrastructure.external.japanese_addresses_api.client import (
    JapaneseAddressesApiError,
)


logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """既知のエラーをClickExceptionに変換するデコレーター."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except JapaneseAddressesApiError as e:
            logger.debug("API error", exc_info=True)
            status = f" (status={e.status_code})" if e.status_code else ""
            msg = f"住所マスターの取得に失敗しました{status}: {e}"
            raise click.ClickException(msg) from e
        except (LookupError, ValueError) as e:
            raise click.ClickException(str(e)) from e

    return wrapper  # type: ignore[return-value]
