import os
from contextlib import contextmanager
from pathlib import Path

from peewee import DatabaseProxy, SqliteDatabase

from quotator_crawler.core.utils import setup_logger

logger = setup_logger(name="db.db")

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


class DatabaseInitializationError(Exception):
    """Raised when the pricing store cannot be opened or migrated"""

    pass


class Database:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.initialized = False
            cls._instance.db = None
            cls._instance.proxy = DatabaseProxy()
        return cls._instance

    def init_db(self, db_path: str):
        """
        Open the SQLite pricing store and bring its schema up to date.

        Args:
            db_path: Path of the database file; parent directories are created
        Raises:
            DatabaseInitializationError: If the store cannot be opened or migrated
        """
        logger.info(f"Using database: {db_path}")
        self._ensure_sqlite_directory(db_path)

        pragmas = {
            "journal_mode": "wal",
            "cache_size": -1024 * 64,
        }
        try:
            database = SqliteDatabase(db_path, pragmas=pragmas)
            database.connect()
            database.execute_sql("SELECT 1")
            database.close()
        except Exception as e:
            error_msg = f"Failed to open SQLite database at {db_path}: {e!s}"
            logger.error(error_msg)
            raise DatabaseInitializationError(error_msg) from e

        self.close()
        self.proxy.initialize(database)
        self.db = database
        self.initialized = True

        try:
            from peewee_migrate import Router

            router = Router(self.db, migrate_dir=str(MIGRATIONS_DIR))
            with self.connection():
                router.run()
            logger.info("Database migrations completed successfully")
        except Exception as e:
            error_msg = f"Error running migrations: {e!s}"
            logger.error(error_msg)
            raise DatabaseInitializationError(error_msg) from e

    def _ensure_sqlite_directory(self, path: str) -> None:
        try:
            directory = os.path.dirname(path)
            if directory:
                Path(directory).mkdir(parents=True, exist_ok=True)
                logger.debug(f"Ensured SQLite directory exists: {directory}")
        except Exception as e:
            error_msg = f"Failed to create data directory: {e!s}"
            logger.error(error_msg)
            raise DatabaseInitializationError(error_msg) from e

    @contextmanager
    def connection(self):
        if not self.initialized:
            raise RuntimeError("Database not initialized. Call init_db first.")

        # Connections are per thread; reuse one that is already open
        if not self.db.is_closed():
            yield
        else:
            try:
                self.db.connect()
                yield
            finally:
                if not self.db.is_closed():
                    self.db.close()

    def close(self) -> None:
        if self.db is not None and not self.db.is_closed():
            self.db.close()


db_instance = Database()
