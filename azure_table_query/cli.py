"""
Command line entry point.

Usage:
    azure-table-query TABLE [--filter F] [--select COL ...] [--top N] [--raw]

Credentials come from --connection-string, --account-name/--account-key or
the AZURE_STORAGE_* environment variables. Each record is written to stdout
as one JSON document per line, as soon as its segment arrives.

Exit codes:
    0 - query completed
    1 - the storage service rejected or failed the request
    2 - invalid arguments or configuration
"""

import argparse
import base64
import json
import logging
import math
import sys
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional, TextIO
from uuid import UUID

from azure.core.exceptions import AzureError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .config import TableStorageConfig
from .core import TableGateway
from .exceptions import TableQueryError
from .handlers import EntityQueryReadApi
from .models import TableQuery

logger = logging.getLogger(__name__)


def _encode_non_finite(value: Any) -> Any:
    """Replace NaN and infinite floats with the strings the table service stores them as."""
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, dict):
        return {key: _encode_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode_non_finite(item) for item in value]
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="azure-table-query",
        description="Run a filtered, paginated query against an Azure table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument("table", help="Table name (used as given, no prefix applied)")

    parser.add_argument(
        "-f", "--filter",
        default="",
        dest="query_filter",
        help="OData filter, e.g. \"PartitionKey eq 'jobs'\" (default: all entities)"
    )

    parser.add_argument(
        "-s", "--select",
        nargs="+",
        metavar="COLUMN",
        help="Columns to return, in order"
    )

    parser.add_argument(
        "-n", "--top",
        type=int,
        dest="max_rows",
        help="Maximum number of rows to return"
    )

    parser.add_argument(
        "--raw",
        action="store_true",
        help="Emit entities with nested properties instead of flat records"
    )

    auth = parser.add_argument_group("authentication")
    auth.add_argument("--account-name", help="Storage account name")
    auth.add_argument("--account-key", help="Storage account key")
    auth.add_argument("--connection-string", help="Storage connection string")
    auth.add_argument("--endpoint", dest="endpoint_url", help="Table endpoint URL (e.g. Azurite)")

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log each segment fetch"
    )

    return parser


def _build_config(args: argparse.Namespace) -> TableStorageConfig:
    overrides = {
        name: getattr(args, name)
        for name in ("account_name", "account_key", "connection_string", "endpoint_url")
        if getattr(args, name)
    }
    if ("account_name" in overrides or "account_key" in overrides) and "connection_string" not in overrides:
        overrides["connection_string"] = None
    if args.debug:
        overrides["enable_debug_logging"] = True
    return TableStorageConfig(**overrides)


def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
    """Parse arguments, run the query and stream records as JSON lines."""
    parser = build_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )

    try:
        config = _build_config(args)
        query = TableQuery.create(
            query_filter=args.query_filter,
            select=args.select,
            max_rows=args.max_rows,
            output="raw" if args.raw else "flat",
        )
    except (PydanticValidationError, TableQueryError) as e:
        parser.error(str(e))

    config.apply_logging()
    read_api = EntityQueryReadApi(TableGateway(config, args.table))

    try:
        for record in read_api.iter_entities(query):
            line = json.dumps(_encode_non_finite(record), default=_json_default, allow_nan=False)
            out.write(line + "\n")
            out.flush()
    except TableQueryError as e:
        parser.error(str(e))
    except AzureError as e:
        logger.error(f"Query against '{args.table}' failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
