"""CLI共通エラーハンドリングのテスト."""

import click
import pytest

from src.infrastructure.external.japanese_addresses_api.client import (
    JapaneseAddressesApiError,
)
from src.interfaces.cli.base import with_error_handling


class TestWithErrorHandling:
    """with_error_handling デコレーターのテスト."""

    def test_api_error_is_chained(self) -> None:
        """元の例外が __cause__ として残る."""
        error = JapaneseAddressesApiError("APIリクエストエラー: 404", status_code=404)

        @with_error_handling
        def command() -> None:
            raise error

        with pytest.raises(click.ClickException) as exc_info:
            command()

        assert exc_info.value.__cause__ is error
        assert "(status=404)" in exc_info.value.message

    @pytest.mark.parametrize("error", [LookupError("見つかりません"), ValueError("不正")])
    def test_lookup_and_value_errors_are_chained(self, error: Exception) -> None:
        @with_error_handling
        def command() -> None:
            raise error

        with pytest.raises(click.ClickException) as exc_info:
            command()

        assert exc_info.value.__cause__ is error
        assert exc_info.value.message == str(error)

    def test_other_errors_propagate(self) -> None:
        @with_error_handling
        def command() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            command()
