#!/usr/bin/env python3
"""
Database initialization script

Creates the key-value table used by the postgres storage backend and
seeds the default categories.
"""
import sys

from finance_tracker.data_manager import DataManager, PostgresStorage, STORAGE_KEYS
from finance_tracker.utils.db_connection import create_kv_table, get_db_connection


def print_summary(conn):
    """Print database summary"""
    cursor = conn.cursor()

    print("\n" + "=" * 80)
    print("📊 DATABASE SUMMARY")
    print("=" * 80)

    cursor.execute("SELECT key FROM kv_store ORDER BY key")
    keys = [row[0] for row in cursor.fetchall()]
    print(f"Stored keys: {len(keys)}")
    for key in keys:
        print(f"  • {key}")

    print("=" * 80)

    cursor.close()


def main():
    """Main initialization function"""
    print("=" * 80)
    print("🚀 FINANCE DATABASE INITIALIZATION")
    print("=" * 80)

    # Connect to database
    print("\n🔌 Connecting to database...")
    try:
        conn = get_db_connection()
        print("   ✅ Connected")
    except Exception as e:
        print(f"   ❌ Connection failed: {e}")
        print("\nCheck DB_HOST, DB_PORT, DB_NAME, DB_USER and DB_PASSWORD in .env")
        sys.exit(1)

    try:
        # 1. Create table
        print(f"\n📄 Creating kv_store table")
        create_kv_table(conn)
        print(f"   ✅ Success")

        # 2. Seed categories
        print(f"\n📚 Seeding default categories")
        manager = DataManager(PostgresStorage(conn))
        if manager.storage.get(STORAGE_KEYS['CATEGORIES']) is not None:
            print(f"   ⚠️  Categories already exist, skipping")
        else:
            categories = manager.load_categories()
            manager.save_categories(categories)
            print(f"   ✅ Seeded {len(categories)} categories")

        # 3. Print summary
        print_summary(conn)

        print("\n✅ Database initialization complete!")
        print("\nNext steps:")
        print("  1. Set STORAGE_BACKEND=postgres in .env")
        print("  2. Import transactions: finance-import /path/to/bank.csv")

    except Exception as e:
        print(f"\n❌ Initialization failed: {e}")
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
