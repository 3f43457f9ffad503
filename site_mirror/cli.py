# === FILE: site_mirror/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска зеркалирования SiteMirror через командную строку.

Опции:
  --url URL              Начальный URL (обязателен; должен начинаться с http)
  --dir DIR              Папка зеркала (default: ./data)
  --config PATH          YAML/JSON-конфиг; опции командной строки важнее
  --timeout SEC          Таймаут одного запроса (по умолчанию без таймаута)
  --connection-limit N   Лимит одновременных соединений (0 — без ограничения)
  --json PATH            Сохранить итоги обхода в JSON
  --log-level LEVEL      Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH        Файл для логов (stdout, если не указан)
  --log-format FORMAT    Формат логирования
  --version, -v          Показать версию SiteMirror

Пример:
  site-mirror --url https://github.com/features --dir ./data
"""
import asyncio
import sys
from pathlib import Path

import click

from site_mirror import __version__
from site_mirror.config import DEFAULT_DIR, build_config
from site_mirror.logger import DEFAULT_FORMAT, init_logging
from site_mirror.mirror import start_mirror
from site_mirror.report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])

#: код выхода при прерывании по Ctrl-C (128 + SIGINT)
EXIT_INTERRUPTED = 130


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMirror, version %(version)s')
@click.option(
    '--url', '-u', 'url',
    default=None,
    help='Начальный URL, например https://github.com/features'
)
@click.option(
    '--dir', '-d', 'directory',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help=f'Папка для сохранения страниц (default: {DEFAULT_DIR})'
)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Таймаут одного запроса (секунд)'
)
@click.option(
    '--connection-limit', 'connection_limit',
    type=click.IntRange(min=0),
    default=None,
    help='Лимит одновременных соединений (0 — без ограничения)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить итоги обхода в JSON-файл'
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
def cli(url, directory, config_path, timeout, connection_limit, json_output, log_level, log_file, log_format):
    """Скачать все страницы сайта в пределах начального URL в локальную папку."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    if url is None and config_path is None:
        print_error('url flag is required')
    if url is not None and not url.strip().startswith('http'):
        print_error('invalid url provided. valid ex.: https://github.com')

    try:
        cfg = build_config(
            config_path,
            url=url,
            dir=directory,
            timeout=timeout,
            connection_limit=connection_limit,
        )
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    if 'dir' not in cfg.model_fields_set:
        click.echo(f'dir flag is empty. using default {DEFAULT_DIR}')

    try:
        stats = asyncio.run(start_mirror(cfg))
    except KeyboardInterrupt:
        click.echo('\nstopping...', err=True)
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        print_error(f'Ошибка при зеркалировании: {e}')

    if json_output:
        try:
            saved_json = render_json(stats, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    click.echo(
        f'{stats.claimed} pages: {stats.fetched} downloaded, '
        f'{stats.from_cache} from cache, {stats.fetch_errors} failed'
    )
    click.echo('done!')


if __name__ == "__main__":
    cli()
