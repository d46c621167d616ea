"""
search-dispatch command line.

Commands:
  status                              provider table and current selection
  search QUERY [--type] [--max] [--provider]
  test PROVIDER                       run a provider health check
  set-key PROVIDER KEY [--engine-id]  store credentials
  select [--primary X] [--fallback Y] choose primary/fallback providers
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from rich.box import ROUNDED
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from search_dispatch.composition import build_dispatcher
from search_dispatch.config import Config
from search_dispatch.dispatch import SearchDispatcher
from search_dispatch.providers.base.models import ProviderCredentials, ProviderType, SearchQuery, SearchType

from .console import make_console

logger = logging.getLogger(__name__)

_PROVIDER_CHOICES = [p.value for p in ProviderType]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="search-dispatch", description="Web search with provider fallback")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="Show configured providers")

    search = sub.add_parser("search", help="Run a search")
    search.add_argument("query")
    search.add_argument("--type", dest="search_type", choices=[t.value for t in SearchType], default="web")
    search.add_argument("--max", dest="max_results", type=int, default=10)
    search.add_argument("--provider", choices=_PROVIDER_CHOICES, help="Pin to one provider (no fallback)")

    test = sub.add_parser("test", help="Test a provider connection")
    test.add_argument("provider", choices=_PROVIDER_CHOICES)

    set_key = sub.add_parser("set-key", help="Store provider credentials")
    set_key.add_argument("provider", choices=_PROVIDER_CHOICES)
    set_key.add_argument("api_key")
    set_key.add_argument("--engine-id", dest="search_engine_id", help="Google search engine id")

    select = sub.add_parser("select", help="Choose primary/fallback providers")
    select.add_argument("--primary", choices=_PROVIDER_CHOICES)
    select.add_argument("--fallback", choices=_PROVIDER_CHOICES)
    return parser


def _cmd_status(dispatcher: SearchDispatcher, console) -> int:
    status = dispatcher.resolver.config_status()
    table = Table(title="Search providers", box=ROUNDED)
    table.add_column("Provider", style="accent")
    table.add_column("Name")
    table.add_column("Types")
    table.add_column("Configured")
    for p in status["providers"]:
        table.add_row(
            p["type"].value,
            p["name"],
            ", ".join(p["supported_types"]),
            "[success]yes[/success]" if p["configured"] else "[muted]no[/muted]",
        )
    console.print(table)
    primary = status["primary_provider"].value if status["primary_provider"] else "-"
    fallback = status["fallback_provider"].value if status["fallback_provider"] else "-"
    console.print(f"Primary: [accent]{primary}[/accent]  Fallback: [accent]{fallback}[/accent]")
    return 0 if status["is_configured"] else 1


def _cmd_search(dispatcher: SearchDispatcher, console, args: argparse.Namespace) -> int:
    query = SearchQuery(
        query=args.query,
        search_type=SearchType(args.search_type),
        max_results=args.max_results,
        provider=args.provider,
    )
    try:
        response = dispatcher.dispatch(query)
    except Exception as e:
        logger.warning("search failed: %s", e)
        console.print(f"[error]{escape(str(e))}[/error]")
        return 1

    lines: List[str] = []
    for i, r in enumerate(response.results, 1):
        lines.append(f"[accent]{i}. {r.title}[/accent]\n   {r.url}")
        if r.snippet:
            lines.append(f"   [muted]{r.snippet}[/muted]")
    console.print(
        Panel(
            "\n".join(lines) or "No results found.",
            title=f"{response.search_type.value} via {response.provider.value}",
            box=ROUNDED,
        )
    )
    return 0


def _cmd_test(dispatcher: SearchDispatcher, console, args: argparse.Namespace) -> int:
    result = dispatcher.test_provider(args.provider)
    if result.success:
        console.print(f"[success]{args.provider}: connection OK[/success]")
        return 0
    console.print(f"[error]{args.provider}: {result.error}[/error]")
    return 1


def _cmd_set_key(dispatcher: SearchDispatcher, console, args: argparse.Namespace) -> int:
    provider = ProviderType.parse(args.provider)
    settings = dispatcher.resolver.load()
    settings.credentials[provider] = ProviderCredentials(
        api_key=args.api_key, search_engine_id=args.search_engine_id
    )
    dispatcher.resolver.save(settings)
    console.print(f"[success]Saved credentials for {provider.value}[/success]")
    return 0


def _cmd_select(dispatcher: SearchDispatcher, console, args: argparse.Namespace) -> int:
    settings = dispatcher.resolver.load()
    if args.primary:
        settings.primary_provider = ProviderType.parse(args.primary)
    if args.fallback:
        settings.fallback_provider = ProviderType.parse(args.fallback)
    dispatcher.resolver.save(settings)
    console.print("[success]Provider selection saved[/success]")
    return 0


def main(argv: Optional[List[str]] = None, dispatcher: Optional[SearchDispatcher] = None, console=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, Config.LOG_LEVEL.upper(), logging.WARNING))

    console = console or make_console(use_color=False if args.no_color else None)
    dispatcher = dispatcher or build_dispatcher()

    handlers = {
        "status": lambda: _cmd_status(dispatcher, console),
        "search": lambda: _cmd_search(dispatcher, console, args),
        "test": lambda: _cmd_test(dispatcher, console, args),
        "set-key": lambda: _cmd_set_key(dispatcher, console, args),
        "select": lambda: _cmd_select(dispatcher, console, args),
    }
    return handlers[args.command]()


if __name__ == "__main__":
    raise SystemExit(main())
