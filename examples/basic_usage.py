#!/usr/bin/env python3
"""
Basic usage examples for the Azure table query helper.

This example demonstrates:
1. Setting up configuration
2. Streaming flat records with a filter, projection and row cap
3. Reading raw entities segment by segment and resuming from a token
4. Wrapping a TableClient you already authenticated
"""

from azure.data.tables import TableServiceClient

from azure_table_query import (
    EntityQueryReadApi,
    TableGateway,
    TableQuery,
    TableStorageConfig,
)


def main():
    """Demonstrate basic usage of the table query helper."""

    # 1. Configure the storage connection
    print("1. Setting up table storage configuration...")
    config = TableStorageConfig.from_env()  # Uses environment variables

    # For the Azurite emulator, you might use:
    # config = TableStorageConfig.for_local_development()
    config.apply_logging()

    read_api = EntityQueryReadApi(TableGateway(config, "jobs"))

    # 2. Flat records, capped at 25 rows
    print("2. Latest failed jobs...")
    for record in read_api.query(
        "PartitionKey eq 'jobs' and status eq @status",
        select=["RowKey", "status", "updated_at"],
        max_rows=25,
        parameters={"status": "failed"},
    ):
        print(f"   {record['RowKey']}: {record.get('status')} at {record.get('updated_at')}")

    # 3. Raw entities, one segment at a time
    print("3. Paging through raw entities...")
    query = TableQuery(query_filter="PartitionKey eq 'jobs'", output="raw")
    saved_token = None
    for page_number, segment in enumerate(read_api.iter_segments(query), 1):
        print(f"   page {page_number}: {len(segment)} entities")
        for entity in segment.items:
            print(f"     {entity.row_key} -> {entity.property_names()}")
        if segment.has_more:
            saved_token = segment.continuation_token
            break

    if saved_token is not None:
        print("   resuming from saved token...")
        remaining = sum(1 for _ in read_api.iter_entities(query, continuation_token=saved_token))
        print(f"   {remaining} more entities")

    # 4. Bring your own authenticated client
    print("4. Using a pre-built client...")
    if config.connection_string:
        service = TableServiceClient.from_connection_string(config.connection_string)
        gateway = TableGateway.from_table_client(service.get_table_client("jobs"))
        first = next(EntityQueryReadApi(gateway).query(max_rows=1), None)
        print(f"   first entity: {first}")

    print("\nDone.")


if __name__ == "__main__":
    main()
