"""
Dataset
=======

The fixed schema of the ``unicorns`` table that every generated query targets.
"""

TABLE_NAME = "unicorns"

UNICORNS_SCHEMA = {
    TABLE_NAME: {
        "columns": [
            "id",
            "company",
            "valuation",
            "date_joined",
            "country",
            "city",
            "industry",
            "select_investors",
        ],
        "types": {
            "id": "SERIAL PRIMARY KEY",
            "company": "VARCHAR(255) NOT NULL UNIQUE",
            "valuation": "DECIMAL(10, 2) NOT NULL",
            "date_joined": "DATE",
            "country": "VARCHAR(255) NOT NULL",
            "city": "VARCHAR(255) NOT NULL",
            "industry": "VARCHAR(255) NOT NULL",
            "select_investors": "TEXT NOT NULL",
        },
    },
}


def describe_schema(schema: dict | None = None) -> str:
    """Render a schema dict as a CREATE TABLE-like block for prompts."""
    schema = schema or UNICORNS_SCHEMA
    blocks = []
    for table_name, table_info in schema.items():
        columns = [
            f"  {col_name} {table_info['types'].get(col_name, 'TEXT')}"
            for col_name in table_info["columns"]
        ]
        blocks.append(f"{table_name} (\n" + ",\n".join(columns) + "\n);")
    return "\n\n".join(blocks)
