"""CLI entry point for smartsheet_typed."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import NoReturn

from loguru import logger
from pydantic import ValidationError

from smartsheet_typed.client import SmartsheetClient
from smartsheet_typed.config import get_settings
from smartsheet_typed.exceptions import ConfigurationError, SmartsheetTypedError
from smartsheet_typed.logging import configure_logging
from smartsheet_typed.schema import load_schema


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="smartsheet-typed",
        description="Inspect Smartsheet sheets and check them against local schemas",
    )
    parser.add_argument(
        "--log-level",
        help="Log level (default: SMARTSHEET_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # sheets command
    subparsers.add_parser(
        "sheets",
        help="List accessible sheets",
    )

    # columns command
    columns_parser = subparsers.add_parser(
        "columns",
        help="Show the columns of a sheet",
    )
    columns_parser.add_argument(
        "sheet_id",
        type=int,
        help="Sheet id",
    )

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Reconcile a sheet against a JSON schema file",
    )
    check_parser.add_argument(
        "schema",
        help="Path to the schema JSON file",
    )
    target = check_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--name", help="Sheet name")
    target.add_argument("--permalink", help="Sheet permalink")
    target.add_argument("--id", type=int, dest="sheet_id", help="Sheet id")
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on columns that are missing from either side",
    )
    check_parser.add_argument(
        "--create",
        action="store_true",
        help="Create the sheet from the schema if no sheet has this name",
    )

    args = parser.parse_args(argv)

    try:
        try:
            settings = get_settings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
        configure_logging(args.log_level or settings.log_level)

        if args.command == "sheets":
            asyncio.run(cmd_sheets())
        elif args.command == "columns":
            asyncio.run(cmd_columns(args))
        elif args.command == "check":
            asyncio.run(cmd_check(args))
    except SmartsheetTypedError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted", file=sys.stderr)
        sys.exit(130)

    sys.exit(0)


async def cmd_sheets() -> None:
    """Execute the sheets command."""
    async with SmartsheetClient() as client:
        sheets = await client.list_sheets()

    for sheet in sheets:
        print(f"{sheet.id}\t{sheet.name}\t{sheet.permalink or ''}")


async def cmd_columns(args: argparse.Namespace) -> None:
    """Execute the columns command."""
    async with SmartsheetClient() as client:
        sheet = await client.api.sheets.get_sheet(args.sheet_id, include_format=False)

    print(f"{sheet.name} ({len(sheet.rows)} rows)")
    for column in sheet.columns:
        flags = " primary" if column.primary else ""
        options = f" {column.options}" if column.options else ""
        print(f"  {column.id}\t{column.title}\t{column.type}{flags}{options}")


async def cmd_check(args: argparse.Namespace) -> None:
    """Execute the check command."""
    schema = load_schema(args.schema)

    async with SmartsheetClient() as client:
        if args.name is not None:
            prepared = await client.prepare_sheet(
                args.name, schema, create_if_not_exist=args.create, strict=args.strict
            )
        elif args.permalink is not None:
            prepared = await client.prepare_sheet_by_permalink(
                args.permalink, schema, strict=args.strict
            )
        else:
            prepared = await client.prepare_sheet_by_id(
                args.sheet_id, schema, strict=args.strict
            )
        rows = await prepared.get_rows()

    print(f"Sheet {prepared.name!r} matches the schema")
    for key in schema:
        column_id = prepared.mapping.column_id_for(key)
        status = str(column_id) if column_id is not None else "(missing)"
        print(f"  {key}\t{schema[key].title}\t{status}")
    print(f"{len(rows)} row(s) decoded")


if __name__ == "__main__":
    main()
