"""ddb_explorer: browse DynamoDB tables from the terminal."""

__version__ = "0.1.0"
