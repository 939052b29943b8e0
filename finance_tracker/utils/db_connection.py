"""
Database connection utilities
"""
import os
import psycopg2
from typing import Optional
from dotenv import load_dotenv


# Load environment variables
load_dotenv()


def get_db_connection(
    host: Optional[str] = None,
    port: Optional[int] = None,
    database: Optional[str] = None,
    user: Optional[str] = None,
    password: Optional[str] = None
):
    """
    Get a connection for the PostgreSQL storage backend

    Args:
        host: Database host (default: from DB_HOST env var)
        port: Database port (default: from DB_PORT env var)
        database: Database name (default: from DB_NAME env var)
        user: Database user (default: from DB_USER env var)
        password: Database password (default: from DB_PASSWORD env var)

    Returns:
        psycopg2 connection object
    """
    return psycopg2.connect(
        host=host or os.getenv('DB_HOST', 'localhost'),
        port=port or int(os.getenv('DB_PORT', '5432')),
        database=database or os.getenv('DB_NAME', 'finance_db'),
        user=user or os.getenv('DB_USER', 'finance_user'),
        password=password or os.getenv('DB_PASSWORD', 'finance_password_local_dev')
    )


KV_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS kv_store (
        key TEXT PRIMARY KEY,
        value JSONB NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""


def create_kv_table(conn):
    """Create the key-value table used by PostgresStorage"""
    cursor = conn.cursor()
    try:
        cursor.execute(KV_TABLE_SQL)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()


def check_connection() -> bool:
    """
    Check that the database is reachable

    Returns:
        True if connection successful, False otherwise
    """
    try:
        conn = get_db_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT 1")
        cursor.close()
        conn.close()
        return True
    except Exception as e:
        print(f"❌ Database connection failed: {e}")
        return False
