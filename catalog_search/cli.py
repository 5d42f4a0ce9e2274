"""catalog-search CLI: query, inspect and export a catalog file."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

from .catalog.repository import JsonCatalogRepository
from .catalog.stats import export_catalog, statistics
from .catalog.store import RecordStore
from .config.paths import CATALOG_PATH
from .config.settings import SearchSettings
from .errors import CatalogLoadError
from .query.suggestions import completion_terms
from .search.engine import SearchEngine
from .search.filters import ALL, SORT_KEYS, FilterEngine, FilterState


def _load_store(args: argparse.Namespace) -> RecordStore:
    store = RecordStore()
    categories = Path(args.categories) if args.categories else None
    asyncio.run(store.load(JsonCatalogRepository(Path(args.catalog), categories)))
    return store


def cmd_search(args: argparse.Namespace) -> int:
    store = _load_store(args)
    settings = SearchSettings.from_env()
    engine = SearchEngine(store, settings=settings)
    filters = FilterEngine(store, fallback_language=settings.fallback_language)
    state = FilterState(
        category=args.category,
        status=args.status,
        version=args.version,
        difficulty=args.difficulty,
        tags=frozenset(args.tag or ()),
        sort=args.sort,
    )
    language = args.lang or settings.language
    ranked = {result.id: result.score for result in engine.rank(args.query, language)}
    records = filters.narrow(engine.search(args.query, language), state, language)
    if not records:
        print(f'No results found for "{args.query}"')
        return 1
    for index, record in enumerate(records[: args.limit], 1):
        score = ranked.get(record.id)
        suffix = f"  (score: {score:.1f})" if score else ""
        print(f"{index}. [{record.id}] {record.title_for(language, settings.fallback_language)}{suffix}")
    if len(records) > args.limit:
        print(f"... {len(records) - args.limit} more")
    return 0


def cmd_suggest(args: argparse.Namespace) -> int:
    store = _load_store(args)
    for term in completion_terms(store, args.query, limit=args.limit):
        print(term)
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    store = _load_store(args)
    print(json.dumps(statistics(store), ensure_ascii=False, indent=2))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    store = _load_store(args)
    content = export_catalog(store, args.format)
    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, encoding="utf-8")
        print(f"Exported {len(store)} records to {out}")
    else:
        sys.stdout.write(content)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="catalog-search", description="Search and filter a showcase catalog")
    ap.add_argument("--catalog", default=str(CATALOG_PATH), help=f"catalog JSON file (default: {CATALOG_PATH})")
    ap.add_argument("--categories", default=None, help="separate categories JSON file, if any")
    sp = ap.add_subparsers(dest="cmd", required=True)

    ap_search = sp.add_parser("search", help="rank records for a query and apply facet filters")
    ap_search.add_argument("query", nargs="?", default="")
    ap_search.add_argument("--lang", default=None, help="language code (default: settings language)")
    ap_search.add_argument("--category", default=ALL)
    ap_search.add_argument("--status", default=ALL)
    ap_search.add_argument("--version", default=ALL)
    ap_search.add_argument("--difficulty", default=ALL)
    ap_search.add_argument("--tag", action="append", help="keep records carrying this tag (repeatable)")
    ap_search.add_argument("--sort", default="relevance", choices=SORT_KEYS)
    ap_search.add_argument("--limit", type=int, default=20)
    ap_search.set_defaults(func=cmd_search)

    ap_suggest = sp.add_parser("suggest", help="autocomplete terms from titles and tags")
    ap_suggest.add_argument("query")
    ap_suggest.add_argument("--limit", type=int, default=5)
    ap_suggest.set_defaults(func=cmd_suggest)

    ap_stats = sp.add_parser("stats", help="print catalog statistics as JSON")
    ap_stats.set_defaults(func=cmd_stats)

    ap_export = sp.add_parser("export", help="export the catalog as JSON or CSV")
    ap_export.add_argument("--format", default="json", choices=("json", "csv"))
    ap_export.add_argument("--out", default=None, help="output file (default: stdout)")
    ap_export.set_defaults(func=cmd_export)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except CatalogLoadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
