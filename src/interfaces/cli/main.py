"""address-patterns CLI エントリーポイント."""

import logging

import click

from src.interfaces.cli.commands.address_patterns import (
    cities,
    prefectures,
    towns,
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="デバッグログを表示")
@click.option(
    "--api", "api_url", type=str, default=None, help="住所マスターAPIのベースURL"
)
@click.option(
    "--town-cache-size",
    type=click.IntRange(min=1),
    default=None,
    help="町丁目パターンキャッシュの最大件数",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    api_url: str | None,
    town_cache_size: int | None,
):
    """住所マスターから表記ゆれ許容の正規表現パターンを生成する."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url
    ctx.obj["town_cache_size"] = town_cache_size
    ctx.obj["verbose"] = verbose


cli.add_command(prefectures)
cli.add_command(cities)
cli.add_command(towns)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
