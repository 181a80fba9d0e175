# === FILE: site_indexer/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteIndexer через командную строку.

Команды:
  crawl         Обойти семена из списка и вывести/сохранить статистику
  seeds show    Показать текущий список семян
  seeds save    Перезаписать список семян из файла или stdin
  config        Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только консоль, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда crawl опции:
  --json PATH         Сохранить статистику в JSON-файл
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --max-depth INT     Переопределить максимальную глубину
  --run-timeout SEC   Дедлайн всего обхода (секунд); статистика возвращается частично

Дополнительно:
  --version, -v       Показать версию SiteIndexer

Пример:
  site-indexer --config configs/default.yaml crawl --json reports/crawl.json
"""
import asyncio
import sys
from pathlib import Path

import click

from site_indexer import __version__
from site_indexer.config import load_config
from site_indexer.engine import start_crawl
from site_indexer.logger import init_logging
from site_indexer.report.json_report import render_json, stats_to_json
from site_indexer.utils import get_seed_list_contents, save_seed_list

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteIndexer, version %(version)s')
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
    help='Путь к файлу логов (только консоль, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteIndexer CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить статистику в JSON-файл'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--max-depth', 'max_depth',
    type=click.IntRange(min=0),
    default=None,
    help='Максимальная глубина обхода (override max_depth)'
)
@click.option(
    '--run-timeout', 'run_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Дедлайн всего обхода (секунд)'
)
@click.pass_context
def crawl(ctx, json_output, pretty, max_depth, run_timeout):
    """Обойти семена и вывести статистику processed/indexed/skipped/errors."""
    cfg = ctx.obj['config']
    overrides = {}
    if max_depth is not None:
        overrides['max_depth'] = max_depth
    if run_timeout is not None:
        overrides['run_timeout'] = run_timeout
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    try:
        stats = asyncio.run(start_crawl(cfg))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if json_output:
        try:
            saved_json = render_json(stats, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
    else:
        click.echo(stats_to_json(stats, pretty=pretty))

    if stats.has_errors:
        click.secho(f'Обход завершён с ошибками: {len(stats.errors)}', fg='yellow', err=True)


@cli.group('seeds', context_settings=CONTEXT_SETTINGS)
def seeds():
    """Управление списком семян (один URL на строку)."""


@seeds.command('show', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_seeds(ctx):
    """Показать список семян как есть."""
    cfg = ctx.obj['config']
    click.echo(get_seed_list_contents(cfg.seed_file))


@seeds.command('save', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.pass_context
def save_seeds(ctx, source):
    """Перезаписать список семян содержимым SOURCE (файл или '-' для stdin)."""
    cfg = ctx.obj['config']
    path = save_seed_list(cfg.seed_file, source.read())
    click.echo(f'Seed list saved: {path}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
