"""
Database abstraction for Postgres and an in-memory test implementation.
"""

from __future__ import annotations

import time
import uuid
from typing import Dict, Optional, Protocol

from sqlalchemy import JSON, Boolean, Column, Float, String, Text, create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shared.types import Creation, CreationType


class DbClient(Protocol):
    """Interface for creation storage."""

    def create_creation(
        self,
        user_id: str,
        prompt: str,
        content: str,
        type: CreationType,
        publish: bool = False,
        created_at: Optional[float] = None,
    ) -> Creation:
        ...

    def get_creation(self, creation_id: str) -> Optional[Creation]:
        ...

    def list_user_creations(self, user_id: str) -> list[Creation]:
        ...

    def list_published_creations(self) -> list[Creation]:
        ...

    def toggle_like(
        self, creation_id: str, user_id: str, liked: Optional[bool] = None
    ) -> Optional[bool]:
        ...


def _next_likes(likes: set[str], user_id: str, liked: Optional[bool]) -> set[str]:
    if liked is None:
        liked = user_id not in likes
    if liked:
        return likes | {user_id}
    return likes - {user_id}


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.creations: Dict[str, Creation] = {}

    def create_creation(
        self,
        user_id: str,
        prompt: str,
        content: str,
        type: CreationType,
        publish: bool = False,
        created_at: Optional[float] = None,
    ) -> Creation:
        creation = Creation(
            id=uuid.uuid4().hex,
            user_id=user_id,
            prompt=prompt,
            content=content,
            type=CreationType(type),
            publish=publish,
            created_at=created_at if created_at is not None else time.time(),
        )
        self.creations[creation.id] = creation
        return creation

    def get_creation(self, creation_id: str) -> Optional[Creation]:
        return self.creations.get(creation_id)

    def list_user_creations(self, user_id: str) -> list[Creation]:
        items = [c for c in self.creations.values() if c.user_id == user_id]
        return sorted(items, key=lambda c: c.created_at, reverse=True)

    def list_published_creations(self) -> list[Creation]:
        items = [c for c in self.creations.values() if c.publish]
        return sorted(items, key=lambda c: c.created_at, reverse=True)

    def toggle_like(
        self, creation_id: str, user_id: str, liked: Optional[bool] = None
    ) -> Optional[bool]:
        creation = self.creations.get(creation_id)
        if not creation:
            return None
        creation.likes = _next_likes(creation.likes, user_id, liked)
        return user_id in creation.likes

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.creations.clear()


class PostgresDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for PostgresDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_creation(self, row: "CreationRow") -> Creation:
        return Creation(
            id=row.id,
            user_id=row.user_id,
            prompt=row.prompt,
            content=row.content,
            type=CreationType(row.type),
            publish=row.publish,
            likes=set(row.likes or []),
            created_at=row.created_at,
        )

    def create_creation(
        self,
        user_id: str,
        prompt: str,
        content: str,
        type: CreationType,
        publish: bool = False,
        created_at: Optional[float] = None,
    ) -> Creation:
        with self.Session() as session:
            row = CreationRow(
                id=uuid.uuid4().hex,
                user_id=user_id,
                prompt=prompt,
                content=content,
                type=CreationType(type).value,
                publish=publish,
                likes=[],
                created_at=created_at if created_at is not None else time.time(),
            )
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_creation(row)

    def get_creation(self, creation_id: str) -> Optional[Creation]:
        with self.Session() as session:
            row = session.get(CreationRow, creation_id)
            if not row:
                return None
            return self._to_creation(row)

    def list_user_creations(self, user_id: str) -> list[Creation]:
        with self.Session() as session:
            stmt = (
                select(CreationRow)
                .where(CreationRow.user_id == user_id)
                .order_by(CreationRow.created_at.desc())
            )
            return [self._to_creation(row) for row in session.execute(stmt).scalars()]

    def list_published_creations(self) -> list[Creation]:
        with self.Session() as session:
            stmt = (
                select(CreationRow)
                .where(CreationRow.publish.is_(True))
                .order_by(CreationRow.created_at.desc())
            )
            return [self._to_creation(row) for row in session.execute(stmt).scalars()]

    def toggle_like(
        self, creation_id: str, user_id: str, liked: Optional[bool] = None
    ) -> Optional[bool]:
        # Plain read-modify-write: no row lock spans the read and the update,
        # so concurrent toggles from different sessions may lose an update.
        with self.Session() as session:
            row = session.get(CreationRow, creation_id)
            if not row:
                return None
            likes = _next_likes(set(row.likes or []), user_id, liked)
            row.likes = sorted(likes)
            session.commit()
            return user_id in likes


Base = declarative_base()


class CreationRow(Base):
    __tablename__ = "creations"

    id = Column(String, primary_key=True)
    user_id = Column(String(255), nullable=False, index=True)
    prompt = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    publish = Column(Boolean, nullable=False, default=False, index=True)
    likes = Column(JSON, nullable=False, default=list)
    created_at = Column(Float, nullable=False, index=True)
