"""住所パターンCLIコマンドのテスト."""

from unittest.mock import AsyncMock, patch

import pytest

from click.testing import CliRunner

from src.application.services.address_pattern_service import AddressPatternService
from src.domain.value_objects.address_pattern import TownRecord
from src.infrastructure.external.japanese_addresses_api.client import (
    JapaneseAddressesApiError,
)
from src.infrastructure.external.japanese_addresses_api.service import (
    JapaneseAddressesDataSourceImpl,
)
from src.interfaces.cli.main import cli


_FACTORY_CREATE = (
    "src.interfaces.cli.commands.address_patterns.show_patterns."
    "AddressPatternServiceFactory.create"
)


@pytest.fixture()
def data_source() -> AsyncMock:
    mock = AsyncMock(spec=JapaneseAddressesDataSourceImpl)
    mock.fetch_prefectures.return_value = {"東京都": ["港区", "千代田区"]}
    mock.fetch_towns.return_value = [TownRecord(town="大字青木")]
    return mock


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


class TestAddressPatternCommands:
    """prefectures / cities / towns コマンドのテスト."""

    def test_prefectures(self, runner: CliRunner, data_source: AsyncMock) -> None:
        with patch(_FACTORY_CREATE, return_value=AddressPatternService(data_source)):
            result = runner.invoke(cli, ["prefectures"])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["東京都\t^東京(都|道|府|県)?"]

    def test_cities(self, runner: CliRunner, data_source: AsyncMock) -> None:
        with patch(_FACTORY_CREATE, return_value=AddressPatternService(data_source)):
            result = runner.invoke(cli, ["cities", "東京都"])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "千代田区\t^千代田(區|区)",
            "港区\t^港(區|区)",
        ]

    def test_towns(self, runner: CliRunner, data_source: AsyncMock) -> None:
        with patch(_FACTORY_CREATE, return_value=AddressPatternService(data_source)):
            result = runner.invoke(cli, ["towns", "埼玉県", "川口市"])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["大字青木\t^(大?字)?青木"]
        data_source.fetch_towns.assert_awaited_once_with("埼玉県", "川口市")

    def test_unknown_prefecture(self, runner: CliRunner, data_source: AsyncMock) -> None:
        with patch(_FACTORY_CREATE, return_value=AddressPatternService(data_source)):
            result = runner.invoke(cli, ["cities", "東京"])

        assert result.exit_code == 1
        assert "都道府県が見つかりません" in result.output

    def test_api_error(self, runner: CliRunner, data_source: AsyncMock) -> None:
        data_source.fetch_prefectures.side_effect = JapaneseAddressesApiError(
            "APIリクエストエラー: 500", status_code=500
        )
        with patch(_FACTORY_CREATE, return_value=AddressPatternService(data_source)):
            result = runner.invoke(cli, ["prefectures"])

        assert result.exit_code == 1
        assert "住所マスターの取得に失敗しました (status=500)" in result.output

    def test_api_option_overrides_settings(
        self, runner: CliRunner, data_source: AsyncMock
    ) -> None:
        with patch(
            _FACTORY_CREATE, return_value=AddressPatternService(data_source)
        ) as create:
            result = runner.invoke(
                cli,
                ["--api", "http://localhost/api/ja", "--town-cache-size", "5", "prefectures"],
            )

        assert result.exit_code == 0, result.output
        settings = create.call_args.args[0]
        assert settings.japanese_addresses_api == "http://localhost/api/ja"
        assert settings.town_cache_size == 5
