"""เพิ่มคอลัมน์/ดัชนีที่ยังไม่มีในฐานข้อมูลเดิมตาม metadata ของโมเดลตอนเริ่มระบบ"""

from __future__ import annotations

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.schema import CreateColumn, CreateIndex, MetaData

logger = logging.getLogger(__name__)


def sync_missing_schema_objects(engine: Engine, metadata: MetaData) -> list[str]:
    """สร้างตารางที่ขาด แล้วเติมคอลัมน์และดัชนีที่ขาดในตารางที่มีอยู่แล้ว

    คืนรายการ object ที่ถูกเพิ่ม (ชื่อ ``table.column`` หรือชื่อดัชนี)
    """
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())
    metadata.create_all(bind=engine)
    preparer = engine.dialect.identifier_preparer
    added: list[str] = []

    with engine.begin() as conn:
        for table in metadata.sorted_tables:
            if table.name not in existing_tables:
                continue

            existing_columns = {
                str(row.get("name"))
                for row in inspector.get_columns(table.name)
                if row.get("name")
            }
            table_sql = preparer.format_table(table)

            for column in table.columns:
                if column.name in existing_columns:
                    continue
                # คอลัมน์ NOT NULL ที่ไม่มีค่า default เพิ่มให้แถวเดิมไม่ได้
                if not column.nullable and column.server_default is None:
                    logger.warning(
                        "[schema-sync] skipped non-nullable column without server default: %s.%s",
                        table.name,
                        column.name,
                    )
                    continue
                column_sql = str(CreateColumn(column).compile(dialect=engine.dialect)).strip()
                conn.execute(text(f"ALTER TABLE {table_sql} ADD COLUMN {column_sql}"))
                added.append(f"{table.name}.{column.name}")

            existing_index_names = {
                str(row.get("name"))
                for row in inspector.get_indexes(table.name)
                if row.get("name")
            }
            for index in table.indexes:
                if not index.name or index.name in existing_index_names:
                    continue
                conn.execute(CreateIndex(index))
                added.append(index.name)

    if added:
        logger.info("[schema-sync] added %s", ", ".join(added))
    return added
