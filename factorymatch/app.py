import argparse
import asyncio
import json
from pathlib import Path

from .env import load_env, load_settings

from . import __version__
from .database import init_database
from .logger import get_logger
from .models import InventionQuery
from .schema import validate_factory, validate_invention, validate_invention_strict
from .service import FactoryMatchService
from storage.repositories.factories import FactoryRepository


def _read_json(path_arg: str):
    input_path = Path(path_arg)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _service(args: argparse.Namespace) -> FactoryMatchService:
    repository = FactoryRepository(Path(args.db), page_size=args.settings.page_size)
    return FactoryMatchService(repository, dedup_chunk_size=args.settings.dedup_chunk_size)


def cmd_init_db(args: argparse.Namespace) -> None:
    init_database(Path(args.db))
    print(f"Database ready: {args.db}")


def cmd_seed(args: argparse.Namespace) -> None:
    rows = _read_json(args.input)
    if isinstance(rows, dict):
        rows = rows.get("factories", [])
    valid = []
    skipped = 0
    for i, row in enumerate(rows):
        errors = validate_factory(row)
        if errors:
            print(f"[skip] row {i}: {'; '.join(errors)}")
            skipped += 1
            continue
        valid.append(row)
    init_database(Path(args.db))
    ids = _service(args).repository.add_factories(valid)
    print(f"Done. inserted={len(ids)} skipped={skipped}")


def cmd_validate(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    if args.strict:
        _, errors = validate_invention_strict(data)
    else:
        errors = validate_invention(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_rank(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    errors = validate_invention(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    invention = InventionQuery.from_dict(data)
    service = _service(args)
    results = service.rank(invention)
    if not results:
        print("No approved factories in the roster.")
    for pos, r in enumerate(results, 1):
        f = r.factory
        print(f"{pos}. [{r.match_score}] {f.name} (id={f.id}, stability={r.stability_index:.2f})")
        print(f"   {r.explanation}")
    if args.save:
        invention_id = service.save_invention(invention, results)
        print(f"Saved invention {invention_id}")


def cmd_dedup(args: argparse.Namespace) -> None:
    service = _service(args)

    def on_progress(processed: int, total: int) -> None:
        print(f"  scanned {processed}/{total}")

    groups = asyncio.run(service.find_duplicates(on_progress=on_progress))
    if not groups:
        print("No duplicates found.")
        return
    print(f"Found {len(groups)} duplicate groups:\n")
    for g in groups:
        print(f"Primary: {g.primary.id} {g.primary.name}")
        for s in g.suspects:
            print(f"  - {s.factory.id} {s.factory.name} [{s.score}] {s.reason}")
        print()


def cmd_merge(args: argparse.Namespace) -> None:
    suspect_ids = [int(s) for s in args.suspects.split(",") if s.strip()]
    try:
        deleted = _service(args).merge_group(args.primary, suspect_ids)
    except ValueError as e:
        raise SystemExit(str(e))
    print(f"Kept {args.primary}, removed {deleted} records")


def cmd_list(args: argparse.Namespace) -> None:
    db_path = Path(args.db)
    if not db_path.exists():
        print(f"Database not found: {db_path}")
        return
    rows = _service(args).repository.fetch_all(approved=True if args.approved else None)
    if not rows:
        print("No factories in roster.")
        return
    print(f"Found {len(rows)} factories in {db_path}:\n")
    for row in rows:
        print(f"ID: {row['id']}")
        print(f"  Name: {row.get('name')}")
        print(f"  Location: {row.get('city')}, {row.get('country')}")
        print(f"  Industry: {row.get('industry')}")
        print(f"  Approved: {row.get('approved')}")
        print()


def main():
    # Load .env if present (FACTORYMATCH_DB_PATH, FACTORYMATCH_LOG_LEVEL, etc.)
    load_env()
    settings = load_settings()
    get_logger().configure(level=settings.log_level, log_dir=settings.log_dir)

    parser = argparse.ArgumentParser(prog="factorymatch", description="Factory matching and roster dedup")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", default=str(settings.db_path), help=f"Path to SQLite database (default: {settings.db_path})")

    subparsers = parser.add_subparsers(dest="command")
    ini = subparsers.add_parser("init-db", help="Create the database tables")
    ini.set_defaults(func=cmd_init_db)

    sed = subparsers.add_parser("seed", help="Load factories from a JSON list into the roster")
    sed.add_argument("--input", required=True, help="Path to JSON file (list of factories)")
    sed.set_defaults(func=cmd_seed)

    val = subparsers.add_parser("validate", help="Validate an invention JSON")
    val.add_argument("--input", required=True, help="Path to invention JSON input")
    val.add_argument("--strict", action="store_true", help="Also require a known production type")
    val.set_defaults(func=cmd_validate)

    rnk = subparsers.add_parser("rank", help="Rank approved factories for an invention JSON")
    rnk.add_argument("--input", required=True, help="Path to invention JSON input")
    rnk.add_argument("--save", action="store_true", help="Store the invention and its matches")
    rnk.set_defaults(func=cmd_rank)

    ddp = subparsers.add_parser("dedup", help="Scan the roster for duplicate factories")
    ddp.set_defaults(func=cmd_dedup)

    mrg = subparsers.add_parser("merge", help="Keep a primary factory and delete its duplicates")
    mrg.add_argument("--primary", required=True, type=int, help="Id of the factory to keep")
    mrg.add_argument("--suspects", required=True, help="Comma-separated ids to delete")
    mrg.set_defaults(func=cmd_merge)

    lst = subparsers.add_parser("list", help="List factories in the roster")
    lst.add_argument("--approved", action="store_true", help="Only approved factories")
    lst.set_defaults(func=cmd_list)

    args = parser.parse_args()
    args.settings = settings

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
