"""สร้างตารางทั้งหมด และเติมคอลัมน์/ดัชนีที่ขาดในฐานข้อมูลเดิม"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from portal.config import settings
from portal.database import Base, Database
import portal.models  # noqa: F401 - registers all models
from portal.utils.schema_sync import sync_missing_schema_objects


def init_db(url: str = settings.DATABASE_URL):
    print(f"Preparing database tables ({url})...")
    database = Database(url)
    try:
        added = sync_missing_schema_objects(database.engine, Base.metadata)
    finally:
        database.close()
    if added:
        print("Added: " + ", ".join(added))
    print("Database initialized successfully.")


if __name__ == "__main__":
    init_db()
