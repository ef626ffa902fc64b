# === FILE: schema_harvest/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SchemaHarvest через командную строку.

Команды:
  harvest LOCALE  Обойти сайты локали, собрать JSON-LD и сохранить CSV по типам
  config          Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда harvest опции:
  --output-dir DIR          Каталог для CSV и JSON-сводки (override output_dir)
  --html PATH               Сохранить HTML-сводку в файл
  --optimize/--no-optimize  Включить/выключить LLM-оптимизацию схем
  --scan-timeout SEC        Таймаут всего обхода (секунд)

Пример:
  schema-harvest harvest nl-be --output-dir output --html output/nl-be.html
"""
import asyncio
import sys
from pathlib import Path

import click

from schema_harvest import __version__
from schema_harvest.aggregator import ResultSet
from schema_harvest.config import load_config
from schema_harvest.engine import start_harvest
from schema_harvest.errors import InputError
from schema_harvest.logger import init_logging, logger
from schema_harvest.report import build_report, write_report
from schema_harvest.sources import load_urls

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SchemaHarvest, version %(version)s')
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SchemaHarvest CLI."""
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


@cli.command('harvest', context_settings=CONTEXT_SETTINGS)
@click.argument('locale')
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для CSV и JSON-сводки'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-сводку в файл'
)
@click.option(
    '--optimize/--no-optimize', 'optimize',
    default=None,
    help='LLM-оптимизация схем (по умолчанию из конфига)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд); собранные записи сохраняются, код выхода 1'
)
@click.pass_context
def harvest(ctx, locale, output_dir, html_output, optimize, scan_timeout):
    """Собрать JSON-LD со всех URL локали и сохранить отчёты."""
    cfg = ctx.obj['config']
    try:
        sites = load_urls(locale, cfg.url_dir)
    except InputError as e:
        print_error(f'Ошибка загрузки списка URL: {e}')

    click.echo(f'Loaded {len(sites)} URLs for locale: {locale}')
    results = ResultSet()
    timed_out = False
    try:
        run = start_harvest(cfg, sites, optimize, results=results)
        if scan_timeout:
            run = asyncio.wait_for(run, timeout=scan_timeout)
        asyncio.run(run)
    except asyncio.TimeoutError:
        timed_out = True
        click.secho(
            f'Обход не завершён за {scan_timeout} секунд, сохраняются уже собранные записи',
            fg='yellow', err=True
        )
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    report = build_report(results)
    if report.summary.total == 0:
        click.echo('No data collected.')
        if timed_out:
            sys.exit(1)
        return

    try:
        saved = write_report(
            report,
            output_dir or cfg.output_dir,
            locale,
            html_path=html_output,
            template_dir=cfg.template_dir,
        )
    except Exception as e:
        print_error(f'Ошибка при сохранении отчётов: {e}')

    for path in saved.csv_files:
        click.echo(f'CSV report: {path}')
    click.echo(f'Summary: {saved.summary_file}')
    if saved.html_file:
        click.echo(f'HTML report: {saved.html_file}')

    summary = report.summary
    logger.info("Harvest finished: %d records, %d with schema", summary.total, summary.with_schema)
    click.echo('')
    click.echo('Summary:')
    click.echo(f'Total records: {summary.total}')
    click.echo(f'Records with schema: {summary.with_schema}')
    click.echo(f'Records without schema: {summary.without_schema}')
    for schema_type, count in summary.type_breakdown.items():
        click.echo(f'  {schema_type}: {count}')
    if timed_out:
        print_error('Отчёт неполный: обход прерван по --scan-timeout')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
