from supabase import create_client, Client
from fastapi import Request
from schoolquiz.config import Settings
from typing import Any, Dict, Iterable, List, Optional
import logging

logger = logging.getLogger(__name__)

QUIZZES = "quizzes"
RESULTS = "results"
USERS = "users"


class Database:
    """Table operations over a Supabase client.

    One instance is opened at startup and closed at shutdown; request
    handlers receive it through the ``get_db`` dependency.
    """

    def __init__(self, client: Client):
        self._client: Optional[Client] = client

    @property
    def client(self) -> Client:
        if self._client is None:
            raise RuntimeError("Database is closed")
        return self._client

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def close(self):
        """Release the REST and Auth HTTP sessions held by the client"""
        client, self._client = self._client, None
        if client is None:
            return
        for release in (client.postgrest.aclose, client.auth.close):
            try:
                release()
            except Exception as e:
                logger.warning(f"Error closing Supabase session: {e}")
        logger.info("Database handle closed")

    def insert(self, table: str, data: dict):
        """Insert data into table"""
        try:
            result = self.client.table(table).insert(data).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Insert error in {table}: {e}")
            raise

    def select(self, table: str, columns: str = "*", filters: dict = None, limit: int = None):
        """Select data from table"""
        try:
            query = self.client.table(table).select(columns)

            if filters:
                for key, value in filters.items():
                    query = query.eq(key, value)

            if limit:
                query = query.limit(limit)

            result = query.execute()
            return result.data
        except Exception as e:
            logger.error(f"Select error in {table}: {e}")
            raise

    def select_in(self, table: str, column: str, values: Iterable[Any], columns: str = "*"):
        """Select rows whose column matches any of the given values"""
        values = list(values)
        if not values:
            return []
        try:
            result = self.client.table(table).select(columns).in_(column, values).execute()
            return result.data
        except Exception as e:
            logger.error(f"Select error in {table}: {e}")
            raise

    def update(self, table: str, data: dict, filters: dict):
        """Update data in table"""
        try:
            query = self.client.table(table).update(data)

            for key, value in filters.items():
                query = query.eq(key, value)

            result = query.execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Update error in {table}: {e}")
            raise

    def delete(self, table: str, filters: dict):
        """Delete data from table"""
        try:
            query = self.client.table(table).delete()

            for key, value in filters.items():
                query = query.eq(key, value)

            result = query.execute()
            return result.data
        except Exception as e:
            logger.error(f"Delete error in {table}: {e}")
            raise

    def update_auth_user(self, user_id: str, attributes: Dict[str, Any]):
        """Update credentials held by Supabase Auth (password, email)"""
        try:
            return self.client.auth.admin.update_user_by_id(user_id, attributes)
        except Exception as e:
            logger.error(f"Auth update error for user {user_id}: {e}")
            raise

    def check_connection(self) -> bool:
        """Run a trivial query against each table"""
        for table in (USERS, QUIZZES, RESULTS):
            try:
                self.select(table, "id", limit=1)
            except Exception as e:
                logger.error(f"Connection test failed on {table}: {e}")
                return False
        return True


def open_database(settings: Settings) -> Database:
    """Create the service-role client and wrap it"""
    if not settings.supabase_url:
        raise RuntimeError("SUPABASE_URL is not configured")
    client = create_client(
        settings.supabase_url,
        settings.supabase_service_role_key.get_secret_value()
    )
    logger.info(f"Database opened for {settings.supabase_url}")
    return Database(client)


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the handle opened by the app lifespan"""
    return request.app.state.db


def rows_by_id(rows: List[dict]) -> Dict[str, dict]:
    return {str(row["id"]): row for row in rows}
