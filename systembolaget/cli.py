"""Command-line entrypoint for the Systembolaget catalog client."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from dataclasses import fields
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from .config import build_client, load_settings
from .conversions import to_decimal
from .models import Article, Store


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _filter_articles(
    articles: Iterable[Article], search: Optional[str], max_price: Optional[Decimal]
) -> List[Article]:
    needle = (search or "").casefold()
    selected: List[Article] = []
    for article in articles:
        if needle and needle not in f"{article.name} {article.sub_name}".casefold():
            continue
        if max_price is not None:
            price = to_decimal(article.price)
            if price is None or price > max_price:
                continue
        selected.append(article)
    return selected


def _filter_stores(stores: Iterable[Store], search: Optional[str]) -> List[Store]:
    needle = (search or "").casefold()
    if not needle:
        return list(stores)
    return [
        store
        for store in stores
        if needle in " ".join(store.address_lines + (store.search_words,)).casefold()
    ]


def _write_export(path: Path, fmt: str, rows: Sequence[Dict[str, str]], fieldnames: List[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "csv":
        with path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)
        return
    path.write_text(json.dumps(list(rows), indent=2, ensure_ascii=False), encoding="utf-8")


def _print_json(rows: Sequence[Dict[str, str]]) -> None:
    print(json.dumps(list(rows), indent=2, ensure_ascii=False))


def cmd_articles_list(args: argparse.Namespace) -> int:
    settings = load_settings()
    _configure_logging(settings.log_level)

    max_price = None
    if args.max_price is not None:
        max_price = to_decimal(args.max_price)
        if max_price is None:
            raise RuntimeError(f"Invalid --max-price: {args.max_price}")

    with build_client(settings) as client:
        catalog = client.fetch_articles()

    articles = _filter_articles(catalog.articles, args.search, max_price)[: args.limit]
    if args.json:
        _print_json([article.to_dict() for article in articles])
        return 0

    if not articles:
        print("No articles found")
        return 0

    table = Table(title=f"Articles ({len(articles)} of {len(catalog.articles)})")
    for column in ("Nr", "Name", "Price", "Volume (ml)", "Alcohol", "Country"):
        table.add_column(column)
    for article in articles:
        name = f"{article.name} {article.sub_name}".strip()
        table.add_row(
            article.number,
            name,
            article.price,
            article.volume_ml,
            article.alcohol_percentage,
            article.origin_country,
        )
    Console().print(table)
    return 0


def cmd_articles_export(args: argparse.Namespace) -> int:
    settings = load_settings()
    _configure_logging(settings.log_level)

    with build_client(settings) as client:
        catalog = client.fetch_articles()

    output = Path(args.output)
    _write_export(
        output,
        args.format,
        [article.to_dict() for article in catalog.articles],
        [f.name for f in fields(Article)],
    )
    print(f"Exported {len(catalog.articles)} articles to {output}")
    return 0


def cmd_stores_list(args: argparse.Namespace) -> int:
    settings = load_settings()
    _configure_logging(settings.log_level)

    with build_client(settings) as client:
        directory = client.fetch_stores()

    stores = _filter_stores(directory.stores, args.search)[: args.limit]
    if args.json:
        _print_json([store.to_dict() for store in stores])
        return 0

    if not stores:
        print("No stores found")
        return 0

    table = Table(title=f"Stores ({len(stores)} of {len(directory.stores)})")
    for column in ("Nr", "Type", "Address", "Phone", "Opening hours"):
        table.add_column(column)
    for store in stores:
        table.add_row(
            store.number,
            store.type,
            ", ".join(store.address_lines),
            store.phone_number,
            store.opening_hours,
        )
    Console().print(table)
    return 0


def cmd_stores_export(args: argparse.Namespace) -> int:
    settings = load_settings()
    _configure_logging(settings.log_level)

    with build_client(settings) as client:
        directory = client.fetch_stores()

    output = Path(args.output)
    _write_export(
        output,
        args.format,
        [store.to_dict() for store in directory.stores],
        [f.name for f in fields(Store)],
    )
    print(f"Exported {len(directory.stores)} stores to {output}")
    return 0


def cmd_info() -> int:
    settings = load_settings()
    _configure_logging(settings.log_level)

    with build_client(settings) as client:
        catalog = client.fetch_articles()
        directory = client.fetch_stores()

    payload = {
        "created_at": catalog.created_at,
        "articles": len(catalog.articles),
        "articles_message": catalog.info_message,
        "stores": len(directory.stores),
        "stores_message": directory.info_message,
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="systembolaget", description="Systembolaget catalog client")
    sub = parser.add_subparsers(dest="command", required=True)

    articles = sub.add_parser("articles", help="Article catalog operations")
    articles_sub = articles.add_subparsers(dest="articles_command", required=True)
    list_parser = articles_sub.add_parser("list", help="List articles")
    list_parser.add_argument("--search", required=False, help="Match on name or sub-name")
    list_parser.add_argument("--max-price", required=False, help="Highest price, VAT included")
    list_parser.add_argument("--limit", type=int, default=50, help="Max rows to return")
    list_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    export_parser = articles_sub.add_parser("export", help="Export every article")
    export_parser.add_argument("--output", required=True, help="Output file path")
    export_parser.add_argument("--format", choices=["json", "csv"], default="json", help="Output format")

    stores = sub.add_parser("stores", help="Store directory operations")
    stores_sub = stores.add_subparsers(dest="stores_command", required=True)
    stores_list = stores_sub.add_parser("list", help="List stores")
    stores_list.add_argument("--search", required=False, help="Match on address or search words")
    stores_list.add_argument("--limit", type=int, default=50, help="Max rows to return")
    stores_list.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    stores_export = stores_sub.add_parser("export", help="Export every store")
    stores_export.add_argument("--output", required=True, help="Output file path")
    stores_export.add_argument("--format", choices=["json", "csv"], default="json", help="Output format")

    sub.add_parser("info", help="Show document timestamps and messages")

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "articles" and args.articles_command == "list":
            return cmd_articles_list(args)

        if args.command == "articles" and args.articles_command == "export":
            return cmd_articles_export(args)

        if args.command == "stores" and args.stores_command == "list":
            return cmd_stores_list(args)

        if args.command == "stores" and args.stores_command == "export":
            return cmd_stores_export(args)

        if args.command == "info":
            return cmd_info()

        parser.print_help()
        return 1
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
