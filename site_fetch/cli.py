#!/usr/bin/env python3
"""
Точка входа SiteFetch для командной строки.

Команды:
  crawl     Обойти сайт и вывести/сохранить страницы
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (необязательно)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  URL                 Стартовый URL (иначе base_url из конфига)
  --outfile PATH      Сохранить результат в файл (формат по расширению)
  --concurrency INT   Число одновременных загрузок
  --format FMT        json или text
  --timeout SEC       Таймаут одного запроса
  --crawl-timeout SEC Таймаут всего обхода

Дополнительно:
  --version, -v       Показать версию SiteFetch

Пример:
  site-fetch crawl https://example.com/docs -o site.json --concurrency 5
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_fetch import __version__
from site_fetch.config import FetchConfig, load_config
from site_fetch.engine import start_crawl
from site_fetch.logger import DEFAULT_FORMAT, configure
from site_fetch.report import save_report, serialize_pages, total_tokens

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _build_config(ctx: click.Context, **overrides) -> FetchConfig:
    try:
        return load_config(ctx.obj.get('config_path'), **overrides)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteFetch, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteFetch CLI."""
    configure(level=log_level, log_file=log_file, log_format=log_format)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--outfile', '-o', 'outfile',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить результат в файл (.json -> JSON, иначе текст)'
)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Число одновременных загрузок (default: 3)'
)
@click.option(
    '--format', 'fmt',
    type=click.Choice(['json', 'text']),
    default=None,
    help='Формат вывода'
)
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Таймаут одного запроса (секунд)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд); выводятся уже собранные страницы'
)
@click.pass_context
def crawl(ctx, url, outfile, concurrency, fmt, timeout, crawl_timeout):
    """Обойти сайт и сериализовать найденные страницы."""
    cfg = _build_config(
        ctx,
        base_url=url,
        concurrency=concurrency,
        output=outfile,
        format=fmt,
        timeout=timeout,
    )
    click.echo(f'Starting crawl: {cfg.base_url}', err=True)
    try:
        pages = asyncio.run(start_crawl(cfg, crawl_timeout=crawl_timeout))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    click.echo(f'Pages: {len(pages)}, tokens: {total_tokens(pages)}', err=True)
    output_format = cfg.resolved_format()

    # Если не сохраняем в файл — печатаем в stdout
    if cfg.output is None:
        click.echo(serialize_pages(pages, output_format))
        return

    try:
        saved = save_report(pages, output_format, cfg.output)
    except OSError as e:
        print_error(f'Ошибка при сохранении результата: {e}')
    click.echo(f'Saved: {saved}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.pass_context
def show_config(ctx, url):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _build_config(ctx, base_url=url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
