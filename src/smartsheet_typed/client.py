"""SmartsheetClient - Main API for smartsheet_typed.

Prepares sheets against local schemas:

    >>> async with SmartsheetClient(access_token="...") as client:
    ...     projects = await client.prepare_sheet(
    ...         "Projects", schema, create_if_not_exist=True
    ...     )
    ...     for row in await projects.get_rows():
    ...         print(row["status"])
"""

from __future__ import annotations

from types import TracebackType

from loguru import logger
from pydantic import ValidationError

from smartsheet_typed.api import SmartsheetAPI
from smartsheet_typed.config import Settings, get_settings
from smartsheet_typed.exceptions import (
    ConfigurationError,
    ResourceNotFoundError,
    SheetNotFoundError,
)
from smartsheet_typed.models import SheetSummary
from smartsheet_typed.reconcile import columns_from_schema, reconcile
from smartsheet_typed.schema import Schema, validate_schema
from smartsheet_typed.sheet import PreparedSheet
from smartsheet_typed.transport import SmartsheetTransport, Transport


class SmartsheetClient:
    """Factory for prepared sheets.

    Example:
        >>> client = SmartsheetClient(access_token="...")
        >>> sheet = await client.prepare_sheet("Opportunity", schema)
        >>> row = await sheet.insert_row({"project_id": "P1", "status": "Active"})
    """

    def __init__(
        self,
        access_token: str | None = None,
        *,
        transport: Transport | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: Smartsheet API token. Defaults to SMARTSHEET_API_TOKEN.
            transport: Transport to use instead of the HTTP transport
            settings: Settings to use instead of the environment

        Raises:
            ConfigurationError: If no token is available and no transport given
        """
        if transport is None:
            if settings is None:
                try:
                    settings = get_settings()
                except ValidationError as e:
                    raise ConfigurationError(f"Invalid configuration: {e}") from e
            token = access_token or settings.api_token
            if not token:
                raise ConfigurationError(
                    "Missing Smartsheet API token. "
                    "Pass access_token or set SMARTSHEET_API_TOKEN."
                )
            transport = SmartsheetTransport(
                token, base_url=settings.base_url, timeout=settings.timeout
            )
        self._transport = transport
        self.api = SmartsheetAPI(transport)

    async def __aenter__(self) -> SmartsheetClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self._transport.close()

    async def list_sheets(self) -> list[SheetSummary]:
        """List every sheet the token can access."""
        return await self.api.sheets.list_sheets(include_all=True)

    async def prepare_sheet(
        self,
        name: str,
        schema: Schema,
        *,
        create_if_not_exist: bool = False,
        strict: bool = False,
    ) -> PreparedSheet:
        """Prepare a sheet by name.

        Args:
            name: Exact sheet name
            schema: Local schema to reconcile against the sheet
            create_if_not_exist: Create the sheet from the schema when missing
            strict: Reject columns that are not part of the schema

        Raises:
            SchemaError: If the schema is invalid
            SheetNotFoundError: If the sheet is missing and creation is off
            ReconciliationError: If the sheet does not match the schema
        """
        validate_schema(schema)
        sheets = await self.api.sheets.list_sheets(include_all=True)
        found = next((sheet for sheet in sheets if sheet.name == name), None)

        if found is not None:
            sheet_id = found.id
        elif create_if_not_exist:
            created = await self.api.sheets.create_sheet(name, columns_from_schema(schema))
            logger.info(f"Created sheet {name!r} (id {created.id})")
            sheet_id = created.id
        else:
            raise SheetNotFoundError(f'Sheet "{name}" not found.')

        return await self._prepare(sheet_id, schema, strict)

    async def prepare_sheet_by_permalink(
        self,
        permalink: str,
        schema: Schema,
        *,
        strict: bool = False,
    ) -> PreparedSheet:
        """Prepare a sheet by its permalink. Never creates a sheet."""
        validate_schema(schema)
        sheets = await self.api.sheets.list_sheets(include_all=True)
        found = next((sheet for sheet in sheets if sheet.permalink == permalink), None)
        if found is None:
            raise SheetNotFoundError(
                f'Sheet with permalink "{permalink}" not found (or not accessible).'
            )
        return await self._prepare(found.id, schema, strict)

    async def prepare_sheet_by_id(
        self,
        sheet_id: int,
        schema: Schema,
        *,
        strict: bool = False,
    ) -> PreparedSheet:
        """Prepare a sheet by its id."""
        validate_schema(schema)
        return await self._prepare(sheet_id, schema, strict)

    async def _prepare(self, sheet_id: int, schema: Schema, strict: bool) -> PreparedSheet:
        try:
            sheet = await self.api.sheets.get_sheet(sheet_id)
        except ResourceNotFoundError as e:
            raise SheetNotFoundError(f'Sheet "{sheet_id}" not found.') from e

        mapping = reconcile(sheet.columns, schema, strict=strict)
        logger.debug(
            f"Prepared sheet {sheet.name!r}: {len(mapping)} of {len(schema)} "
            f"schema columns matched, {len(sheet.rows)} rows"
        )
        return PreparedSheet(self.api, sheet, schema, mapping)
