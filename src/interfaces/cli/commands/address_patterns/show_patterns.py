"""住所正規表現パターン表示コマンド.

各行に `<元の名前>\t<パターン>` を出力する。
"""

from __future__ import annotations

import asyncio

from dataclasses import replace

import click

from src.application.services.address_pattern_service import AddressPatternService
from src.domain.value_objects.address_pattern import RegexPatternEntry
from src.infrastructure.config.settings import get_settings
from src.interfaces.cli.base import with_error_handling
from src.interfaces.factories.address_pattern_service_factory import (
    AddressPatternServiceFactory,
)


def _create_service(ctx: click.Context) -> AddressPatternService:
    options = ctx.obj or {}
    settings = get_settings()
    if options.get("api_url"):
        settings = replace(settings, japanese_addresses_api=options["api_url"])
    if options.get("town_cache_size"):
        settings = replace(settings, town_cache_size=options["town_cache_size"])
    return AddressPatternServiceFactory.create(settings)


def _echo_entries(entries: tuple[RegexPatternEntry[str], ...]) -> None:
    for entry in entries:
        click.echo(f"{entry.source}\t{entry.pattern}")


def _echo_cache_info(ctx: click.Context, service: AddressPatternService) -> None:
    if not (ctx.obj or {}).get("verbose"):
        return
    info = service.cache_info()
    click.echo(
        f"# cache: prefecture_patterns={info.prefecture_patterns.size}"
        f" city_patterns={info.city_patterns.size}"
        f" town_patterns={info.town_patterns.size}",
        err=True,
    )


@click.command()
@click.pass_context
@with_error_handling
def prefectures(ctx: click.Context):
    """都道府県のパターンを表示する."""

    async def run() -> None:
        service = _create_service(ctx)
        _echo_entries(await service.get_prefecture_patterns())
        _echo_cache_info(ctx, service)

    asyncio.run(run())


@click.command()
@click.argument("pref")
@click.pass_context
@with_error_handling
def cities(ctx: click.Context, pref: str):
    """都道府県内の市区町村のパターンを文字数の降順で表示する."""

    async def run() -> None:
        service = _create_service(ctx)
        _echo_entries(await service.get_city_patterns(pref))
        _echo_cache_info(ctx, service)

    asyncio.run(run())


@click.command()
@click.argument("pref")
@click.argument("city")
@click.pass_context
@with_error_handling
def towns(ctx: click.Context, pref: str, city: str):
    """市区町村内の町丁目のパターンを文字数の降順で表示する."""

    async def run() -> None:
        service = _create_service(ctx)
        patterns = await service.get_town_patterns(pref, city)
        for entry in patterns:
            click.echo(f"{entry.source.town}\t{entry.pattern}")
        _echo_cache_info(ctx, service)

    asyncio.run(run())
