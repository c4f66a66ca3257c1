"""ฐานข้อมูล: declarative Base และ handle ของ engine/session ที่สร้างอย่างชัดเจนแล้วฉีดเข้าแอป"""

from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class Database:
    """Engine + session factory ของหนึ่ง process

    แอปสร้าง handle นี้ตอน startup เก็บไว้ที่ ``app.state.database`` และเรียก
    :meth:`close` ตอน shutdown; สคริปต์และเทสต์สร้าง handle ของตัวเอง
    """

    def __init__(self, url: str, **engine_kwargs):
        if url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        self.url = url
        self.engine = create_engine(url, pool_pre_ping=True, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def close(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
