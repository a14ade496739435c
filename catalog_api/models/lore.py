"""
Catalog API — Star Wars Lore SQLAlchemy Models
================================================

What:  ORM models describing the `episodes`, `characters` and
       `character_appearances` tables.
Who:   Used by the init script and the test suite to create the schema.
       Request handling never loads these classes; repositories issue
       hand-written SQL against the same tables.

Relationships:
    Character ↔ Episode is many-to-many through CharacterAppearance, which
    carries the role and screen time. An appearance references exactly one
    existing character and one existing episode (NOT NULL foreign keys,
    unique per pair).
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from catalog_api.database import LoreBase


class Episode(LoreBase):
    """A film in the saga, identified publicly by its episode number."""

    __tablename__ = "episodes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    episode_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    release_year: Mapped[int] = mapped_column(Integer, nullable=False)
    director: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Soft delete flag: inactive rows are excluded from every list query
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    def __repr__(self) -> str:
        return f"<Episode(id={self.id}, episode_number={self.episode_number}, title='{self.title}')>"


class Character(LoreBase):
    """A person, droid or creature appearing in one or more episodes."""

    __tablename__ = "characters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    species: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    homeworld: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    affiliation: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    # Name ordering is the default listing order; affiliation backs the filter route
    __table_args__ = (
        Index("idx_characters_name", "name"),
        Index("idx_characters_affiliation", "affiliation"),
    )

    def __repr__(self) -> str:
        return f"<Character(id={self.id}, name='{self.name}')>"


class CharacterAppearance(LoreBase):
    """Join row linking a character to an episode, with the character's role in it."""

    __tablename__ = "character_appearances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    character_id: Mapped[int] = mapped_column(
        ForeignKey("characters.id", ondelete="CASCADE"), nullable=False
    )
    episode_id: Mapped[int] = mapped_column(
        ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False
    )
    # Values used by the seed data: main, supporting, minor, cameo
    role: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    screen_time_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    __table_args__ = (
        UniqueConstraint("character_id", "episode_id", name="uq_appearance_character_episode"),
        Index("idx_appearances_episode", "episode_id"),
    )
