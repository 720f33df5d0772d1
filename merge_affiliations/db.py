import duckdb
import pandas as pd
from merge_affiliations.constants import DEFAULT_MEMORY_LIMIT
from merge_affiliations.utils import validate_memory_limit


class DatabaseManager:
    """In-memory duckdb connection used to order the review file."""

    def __init__(self, memory_limit=DEFAULT_MEMORY_LIMIT):
        validated_memory_limit = validate_memory_limit(memory_limit)

        self.con = duckdb.connect(database=":memory:")
        self.con.execute(f"SET memory_limit='{validated_memory_limit}';")
        self.con.execute("PRAGMA threads=1;")

    def register_df(self, name, df: pd.DataFrame):
        self.con.register(name, df)

    def unregister(self, name):
        self.con.unregister(name)

    def query_df(self, sql_query) -> pd.DataFrame:
        return self.con.execute(sql_query).fetch_df()

    def close(self):
        if self.con:
            self.con.close()
            self.con = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
