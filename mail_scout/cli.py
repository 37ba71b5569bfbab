# === FILE: mail_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска MailScout через командную строку.

Команды:
  crawl     Запустить обход (выполняется и без явного указания команды)
  config    Показать итоговые параметры обхода

Общие опции:
  --url, -u URL          Стартовый URL (https:// добавляется, если схема не указана)
  --file, -f PATH        Файл со списком URL, по одному на строку (пакетный режим)
  --out, -o PATH         Файл для найденных адресов (default: emails.txt)
  --limit-urls INT       Лимит URL (default: 1000)
  --limit-emails INT     Лимит адресов (default: 1000)
  --max-workers INT      Воркеры пакетного режима (default: 50)
  --depth INT            Глубина: -1 без ограничений, 0 только стартовый URL
  --timeout MS           Таймаут запроса в мс (default: 10000)
  --sleep MS             Пауза перед каждым запросом в мс (default: 0)
  --ignore-queries/--keep-queries
  --parallel/--sequential
  --config, -c PATH      YAML/JSON с параметрами по умолчанию
  --log-level LEVEL      Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH        Файл для логов

Команда crawl опции:
  --json PATH            Сохранить JSON-отчёт в файл
  --events               Печатать события обхода построчно (status / email)

Дополнительно:
  --version, -v          Показать версию MailScout

Пример:
  mail-scout --url example.com --depth 2 --sequential crawl --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click

from mail_scout import __version__
from mail_scout.aggregator import CrawlReport
from mail_scout.config import load_config
from mail_scout.engine import start_crawl, stream_crawl
from mail_scout.logger import configure
from mail_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])
_DOTS = 28
_SHOWN_DOMAINS = 5


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _line(label: str, value: str, fg: str = None):
    click.secho(label + "." * max(1, _DOTS - len(label)), fg='yellow', nl=False)
    click.secho(" " + value, fg=fg)


def print_summary(report: CrawlReport):
    """Итоговая сводка в stdout."""
    click.echo()
    _line("Crawling", "Complete!", fg='green')
    _line(
        "URLs",
        f"{report.pages_crawled} urls crawled, {report.pages_with_emails} urls with emails "
        f"({report.hit_rate:.2f}% hit rate)",
    )
    _line("Unique emails", f"{len(report.emails)} addresses")
    if report.domains:
        _line("Domains", f"{len(report.domains)} email domains")
        items = list(report.domains.items())
        for domain, count in items[:_SHOWN_DOMAINS]:
            click.echo(" " * (_DOTS + 1) + f"({count}) @{domain}")
        if len(items) > _SHOWN_DOMAINS:
            click.echo(" " * (_DOTS + 1) + f"{len(items) - _SHOWN_DOMAINS} more domains")
    if report.output:
        _line("Output file", report.output, fg='cyan')
    _line("Time taken", f"{report.duration:.2f} seconds")


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(__version__, '--version', '-v', message='MailScout, version %(version)s')
@click.option('--url', '-u', default=None, help='Стартовый URL для обхода.')
@click.option(
    '--file', '-f', 'url_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл со списком URL (по одному на строку).'
)
@click.option('--out', '-o', default=None, help='Файл для адресов [emails.txt]; "" отключает запись.')
@click.option('--limit-urls', type=int, default=None, help='Лимит URL [1000].')
@click.option('--limit-emails', type=int, default=None, help='Лимит адресов [1000].')
@click.option('--max-workers', type=int, default=None, help='Воркеры пакетного режима [50].')
@click.option('--depth', type=int, default=None, help='-1 все уровни, 0 только URL, n уровней вперёд [-1].')
@click.option('--timeout', type=int, default=None, help='Таймаут запроса, мс [10000].')
@click.option('--sleep', type=int, default=None, help='Пауза перед запросом, мс [0].')
@click.option(
    '--ignore-queries/--keep-queries', 'ignore_queries',
    default=None,
    help='Отбрасывать query-параметры ссылок [ignore].'
)
@click.option('--parallel/--sequential', 'parallel', default=None, help='Параллельный обход [parallel].')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON файл с параметрами.'
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
    help='Путь к файлу логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, **overrides):
    """MailScout: обход сайта и сбор email-адресов."""
    configure(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        options = load_config(config_path, **overrides)
    except Exception as e:
        print_error(f'Ошибка в параметрах: {e}')
    ctx.ensure_object(dict)
    ctx.obj['options'] = options
    if ctx.invoked_subcommand is None:
        ctx.invoke(crawl)


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option('--events', is_flag=True, help='Печатать события обхода построчно')
@click.pass_context
def crawl(ctx, json_output=None, events=False):
    """Запустить обход и вывести сводку."""
    options = ctx.obj['options']

    if events:
        if options.crawl_from_file:
            print_error('--events работает только с --url')
        try:
            asyncio.run(_print_events(options))
        except Exception as e:
            print_error(f'Ошибка при обходе: {e}')
        return

    try:
        report = asyncio.run(start_crawl(options))
    except OSError as e:
        print_error(f'Ошибка чтения списка URL: {e}')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    print_summary(report)

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')


async def _print_events(options):
    async for event in stream_crawl(options):
        click.echo(event.to_line())


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать итоговые параметры в JSON."""
    options = ctx.obj['options']
    click.echo(options.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
