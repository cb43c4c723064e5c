# === FILE: keyword_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска KeywordScout через командную строку.

Команды:
  run       Обработать sitemap из списка, сохранить фразы и статьи
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда run опции:
  --sitemaps PATH     Файл со списком sitemap URL (override sitemaps_file)
  --exclusions PATH   Файл с исключаемыми фразами (override exclusions_file)
  --output-dir DIR    Базовая папка результатов (override output_dir)
  --workers INT       Макс. число одновременных задач (override max_workers)
  --seed INT          Seed для выбора ключевой фразы
  --json PATH         Сохранить JSON-отчёт о запуске в файл
  --pretty            Преформатировать JSON-вывод (отступ 2)

Дополнительно:
  --version, -v       Показать версию KeywordScout

Пример:
  keyword_scout --config configs/default.yaml run --output-dir out --json out/run.json --pretty
"""
import random
import sys
from pathlib import Path

import click

from keyword_scout import __version__
from keyword_scout.config import ConfigError, load_config
from keyword_scout.engine import Engine
from keyword_scout.logger import DEFAULT_FORMAT, init_logging
from keyword_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='KeywordScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд KeywordScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--sitemaps', '-s', 'sitemaps_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл со списком sitemap URL'
)
@click.option(
    '--exclusions', '-e', 'exclusions_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл с исключаемыми фразами'
)
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Базовая папка результатов'
)
@click.option(
    '--workers', '-w', 'workers',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число одновременных задач (override max_workers)'
)
@click.option(
    '--seed', 'seed',
    type=int,
    default=None,
    help='Seed для выбора ключевой фразы'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт о запуске в файл'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.pass_context
def run(ctx, sitemaps_file, exclusions_file, output_dir, workers, seed, json_output, pretty):
    """Обработать sitemap и сгенерировать статьи."""
    cfg = ctx.obj['config']
    overrides = {}
    if output_dir is not None:
        overrides['output_dir'] = output_dir
    if workers is not None:
        overrides['max_workers'] = workers
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    engine = Engine(cfg, rng=random.Random(seed) if seed is not None else None)
    try:
        report = engine.start(sitemaps_file, exclusions_file)
    except ConfigError as e:
        print_error(f'Ошибка конфигурации: {e}')
    except FileNotFoundError as e:
        print_error(f'Входной файл не найден: {e}')
    except (OSError, UnicodeDecodeError) as e:
        print_error(f'Не удалось прочитать входной файл: {e}')

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    click.echo(
        f'All processing complete. {report.articles_generated} articles generated, '
        f'{len(report.failed)} sites failed. See output folders for details.'
    )


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
