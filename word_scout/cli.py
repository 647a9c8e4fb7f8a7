# === FILE: word_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска WordScout через командную строку.

Команды:
  crawl     Обойти сайт или локальный каталог и записать словарь
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl, цель (ровно одна):
  --url URL | --path PATH | --theme NAME | --resume | --resume-strict

Дополнительно:
  --version, -v       Показать версию WordScout

Пример:
  word_scout crawl --url https://example.com --depth 2 --site-policy subdomain --output-state
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from click.core import ParameterSource
from pydantic import ValidationError

from word_scout import __version__
from word_scout.config import CrawlerConfig, load_config
from word_scout.crawler.site import SitePolicy
from word_scout.engine import Engine, start_crawl
from word_scout.errors import BlankStringError, WordScoutError
from word_scout.extract.filters import FilterMode, parse_filters
from word_scout.logger import init_logging
from word_scout.state import CrawlState, merge_options
from word_scout.utils import parse_url, str_not_whitespace, url_from_path

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

#: pre-canned starting points (for fun)
THEMES: Dict[str, str] = {
    "star-wars": "https://www.starwars.com/databank",
    "tolkien": "https://www.quicksilver899.com/Tolkien/Tolkien_Dictionary.html",
    "witcher": "https://witcher.fandom.com/wiki/Elder_Speech",
    "pokemon": "https://www.smogon.com",
    "bebop": "https://cowboybebop.fandom.com/wiki/Cowboy_Bebop",
    "greek": "https://www.theoi.com",
    "greco-roman": "https://www.gutenberg.org/files/22381/22381-h/22381-h.htm",
    "lovecraft": "https://www.hplovecraft.com",
}

#: crawl options that override the config file when given on the command line
_OVERRIDABLE = (
    "depth",
    "min_word_length",
    "max_word_length",
    "include_js",
    "include_css",
    "filters",
    "site_policy",
    "requests_per_second",
    "limit_concurrent",
    "output",
    "append",
    "output_state",
    "state_file",
)

_DEFAULTS = CrawlerConfig()


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _not_blank(ctx, param, value):
    if value is None:
        return value
    try:
        return str_not_whitespace(value)
    except BlankStringError as e:
        raise click.BadParameter(str(e)) from e


def _filters(ctx, param, value):
    try:
        return parse_filters(value)
    except ValueError as e:
        choices = ", ".join(f.value for f in FilterMode)
        raise click.BadParameter(f"{e}; expected a comma separated list of: {choices}") from e


def _apply_overrides(ctx: click.Context, cfg: CrawlerConfig) -> CrawlerConfig:
    explicit = {
        name: ctx.params[name]
        for name in _OVERRIDABLE
        if ctx.get_parameter_source(name) not in (None, ParameterSource.DEFAULT)
    }
    if not explicit:
        return cfg
    return CrawlerConfig(**{**cfg.model_dump(), **explicit})


def _resolve_target(url: Optional[str], path: Optional[Path], theme: Optional[str], fallback: Optional[str]) -> str:
    if url is not None:
        return parse_url(url)
    if theme is not None:
        return THEMES[theme]
    if path is not None:
        return url_from_path(path)
    if fallback is not None:
        return parse_url(fallback)
    raise click.UsageError("one of --url, --path, --theme, --resume or --resume-strict is required")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='WordScout, version %(version)s')
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
    """Группа команд WordScout CLI."""
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
@click.option('--url', '-u', 'url', default=None, callback=_not_blank, help='URL, с которого начинается обход.')
@click.option(
    '--path', '-p', 'path',
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help='Локальный файл или каталог, с которого начинается обход.'
)
@click.option('--theme', 'theme', default=None, type=click.Choice(sorted(THEMES)), help='Готовый тематический URL.')
@click.option('--resume', is_flag=True, help='Продолжить обход из файла состояния; параметры берутся из командной строки.')
@click.option('--resume-strict', 'resume_strict', is_flag=True, help='Продолжить обход со всеми параметрами из файла состояния.')
@click.option('--depth', '-d', type=click.IntRange(min=0), default=_DEFAULTS.depth, show_default=True, help='Глубина обхода.')
@click.option('--min-word-length', '-m', type=click.IntRange(min=0), default=_DEFAULTS.min_word_length, show_default=True,
              help='Сохранять слова не короче этого значения.')
@click.option('--max-word-length', '-x', type=click.IntRange(min=0), default=_DEFAULTS.max_word_length,
              help='Сохранять слова не длиннее этого значения.')
@click.option('--include-js', '-j', is_flag=True, help='Учитывать JavaScript из <script> и ссылок.')
@click.option('--include-css', '-c', 'include_css', is_flag=True, help='Учитывать CSS из <style> и ссылок.')
@click.option('--filters', default='none', show_default=True, callback=_filters,
              help='Фильтры слов через запятую: ' + ', '.join(f.value for f in FilterMode))
@click.option('--site-policy', 'site_policy', default=_DEFAULTS.site_policy.value, show_default=True,
              type=click.Choice([p.value for p in SitePolicy]), help='Политика посещения найденных URL.')
@click.option('--req-per-sec', '-r', 'requests_per_second', type=click.IntRange(min=0),
              default=_DEFAULTS.requests_per_second, show_default=True, help='Запросов в секунду.')
@click.option('--limit-concurrent', '-l', type=click.IntRange(min=1), default=_DEFAULTS.limit_concurrent,
              show_default=True, help='Лимит одновременных запросов.')
@click.option('--output', '-o', default=_DEFAULTS.output, show_default=True, callback=_not_blank,
              help='Файл словаря (перезаписывается).')
@click.option('--append', is_flag=True, help='Дописать слова к существующему словарю.')
@click.option('--output-state', 'output_state', is_flag=True, help='Записать состояние обхода в файл.')
@click.option('--state-file', 'state_file', default=_DEFAULTS.state_file, show_default=True, callback=_not_blank,
              help='Файл состояния JSON (перезаписывается).')
@click.pass_context
def crawl(ctx, url, path, theme, resume, resume_strict, **_: Any):
    """Обойти цель и записать словарь."""
    targets = [t for t in (url, path, theme) if t is not None] + [f for f in (resume, resume_strict) if f]
    if len(targets) > 1:
        raise click.UsageError("--url, --path, --theme, --resume and --resume-strict are mutually exclusive")

    try:
        cfg = _apply_overrides(ctx, ctx.obj['config'])
    except ValidationError as e:
        print_error(f'Ошибка в параметрах: {e}')

    state = None
    try:
        if resume or resume_strict:
            state = CrawlState.from_file(cfg.state_file)
            cfg = merge_options(state, cfg, strict=resume_strict)
        else:
            cfg = cfg.model_copy(update={"url": _resolve_target(url, path, theme, cfg.url)})
    except (WordScoutError, OSError) as e:
        print_error(f'Ошибка определения цели: {e}')

    try:
        report = asyncio.run(start_crawl(cfg, state))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    Engine.log_summary(report)
    try:
        saved = Engine.save(report)
    except (WordScoutError, OSError) as e:
        print_error(f'Ошибка при сохранении: {e}')
    click.echo(f'Dictionary: {saved} ({len(report.words)} words, depth {report.depth_reached})')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


# expose these names at module level for test monkey-patching
cli.start_crawl = start_crawl

if __name__ == "__main__":
    cli()
