"""
Database models for DIY Share (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.

Column types are kept portable (Uuid, JSON) so the same models run on
PostgreSQL in deployment and SQLite in tests.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKeyConstraint,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(UTC)


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamps; SQLite hands them back naive, so UTC is assumed."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_result_value(self, value, dialect):
        _ = dialect
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
        UniqueConstraint("username", name="users_username_key"),
        UniqueConstraint("email", name="users_email_key"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, server_default=func.now()
    )

    diys: Mapped[list["Diys"]] = relationship(
        "Diys",
        uselist=True,
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments: Mapped[list["Comments"]] = relationship(
        "Comments",
        uselist=True,
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    likes: Mapped[list["Likes"]] = relationship(
        "Likes",
        uselist=True,
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    saved_diys: Mapped[list["SavedDiys"]] = relationship(
        "SavedDiys",
        uselist=True,
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Diys(Base):
    __tablename__ = "diys"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="diys_user_id_fkey"
        ),
        PrimaryKeyConstraint("id", name="diys_pkey"),
        Index("idx_diys_user", "user_id"),
        Index("idx_diys_created_at", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    materials_used: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, onupdate=utcnow, server_default=func.now()
    )

    user: Mapped["Users"] = relationship("Users", back_populates="diys")
    comments: Mapped[list["Comments"]] = relationship(
        "Comments",
        uselist=True,
        back_populates="diy",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    likes: Mapped[list["Likes"]] = relationship(
        "Likes",
        uselist=True,
        back_populates="diy",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    saved_by: Mapped[list["SavedDiys"]] = relationship(
        "SavedDiys",
        uselist=True,
        back_populates="diy",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Comments(Base):
    __tablename__ = "comments"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="comments_user_id_fkey"
        ),
        ForeignKeyConstraint(
            ["diy_id"], ["diys.id"], ondelete="CASCADE", name="comments_diy_id_fkey"
        ),
        PrimaryKeyConstraint("id", name="comments_pkey"),
        Index("idx_comments_diy", "diy_id"),
        Index("idx_comments_user", "user_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    diy_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, server_default=func.now()
    )

    user: Mapped["Users"] = relationship("Users", back_populates="comments")
    diy: Mapped["Diys"] = relationship("Diys", back_populates="comments")


class Likes(Base):
    __tablename__ = "likes"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="likes_user_id_fkey"
        ),
        ForeignKeyConstraint(
            ["diy_id"], ["diys.id"], ondelete="CASCADE", name="likes_diy_id_fkey"
        ),
        PrimaryKeyConstraint("id", name="likes_pkey"),
        UniqueConstraint("user_id", "diy_id", name="likes_user_id_diy_id_key"),
        Index("idx_likes_diy", "diy_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    diy_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, server_default=func.now()
    )

    user: Mapped["Users"] = relationship("Users", back_populates="likes")
    diy: Mapped["Diys"] = relationship("Diys", back_populates="likes")


class SavedDiys(Base):
    __tablename__ = "saved_diys"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="saved_diys_user_id_fkey"
        ),
        ForeignKeyConstraint(
            ["diy_id"], ["diys.id"], ondelete="CASCADE", name="saved_diys_diy_id_fkey"
        ),
        PrimaryKeyConstraint("user_id", "diy_id", name="saved_diys_pkey"),
    )

    user_id: Mapped[UUID] = mapped_column(Uuid)
    diy_id: Mapped[UUID] = mapped_column(Uuid)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, server_default=func.now()
    )

    user: Mapped["Users"] = relationship("Users", back_populates="saved_diys")
    diy: Mapped["Diys"] = relationship("Diys", back_populates="saved_by")


target_metadata = Base.metadata

__all__ = [
    "Base",
    "Comments",
    "Diys",
    "Likes",
    "SavedDiys",
    "Users",
    "target_metadata",
]
