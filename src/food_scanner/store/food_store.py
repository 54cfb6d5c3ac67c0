"""SQLite-backed storage for scanned foods."""

import logging
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from ..models import FoodInfo, StorageInfo

logger = logging.getLogger(__name__)

Base = declarative_base()


class StoreError(Exception):
    """Raised when a database operation fails."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FoodRecord(Base):
    __tablename__ = "food_infos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), index=True)

    food_item: Mapped[str] = mapped_column(String, nullable=False, default="")
    barcode_number: Mapped[str] = mapped_column(String, nullable=False, default="")
    nutrition_facts: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    storage: Mapped[str] = mapped_column(String, nullable=False, default="")
    room_temp_food_safety_window: Mapped[str] = mapped_column(String, nullable=False, default="")
    room_temp_expiration: Mapped[str] = mapped_column(String, nullable=False, default="")
    fridge_food_safety_window: Mapped[str] = mapped_column(String, nullable=False, default="")
    fridge_expiration: Mapped[str] = mapped_column(String, nullable=False, default="")
    food_emoji: Mapped[str] = mapped_column(String, nullable=False, default="")
    cost: Mapped[str] = mapped_column(String, nullable=False, default="")
    user_id: Mapped[str | None] = mapped_column(String, index=True)
    image_url: Mapped[str | None] = mapped_column(String)

    def apply(self, food: FoodInfo) -> None:
        """Copy the fields of a FoodInfo onto this row."""
        self.food_item = food.food_item
        self.barcode_number = food.barcode_number
        self.nutrition_facts = dict(food.nutrition_facts)
        self.storage = food.storage
        self.room_temp_food_safety_window = food.room_temp.food_safety_window
        self.room_temp_expiration = food.room_temp.expected_expiration_date
        self.fridge_food_safety_window = food.fridge.food_safety_window
        self.fridge_expiration = food.fridge.expected_expiration_date
        self.food_emoji = food.food_emoji
        self.cost = food.cost
        self.user_id = food.user_id
        self.image_url = food.image_url

    def to_food(self) -> FoodInfo:
        return FoodInfo(
            food_item=self.food_item,
            barcode_number=self.barcode_number,
            nutrition_facts=dict(self.nutrition_facts or {}),
            storage=self.storage,
            room_temp=StorageInfo(
                food_safety_window=self.room_temp_food_safety_window,
                expected_expiration_date=self.room_temp_expiration,
            ),
            fridge=StorageInfo(
                food_safety_window=self.fridge_food_safety_window,
                expected_expiration_date=self.fridge_expiration,
            ),
            food_emoji=self.food_emoji,
            cost=self.cost,
            user_id=self.user_id,
            image_url=self.image_url,
            id=self.id,
        )


class FoodStore:
    """Create/read/update/delete operations for saved foods.

    Deleted foods are kept with a deleted_at timestamp and hidden from
    every query.
    """

    def __init__(self, database: str = "foods.db"):
        """
        Open (and create if needed) the food database.

        Args:
            database: SQLite file path, or ":memory:" for a private
                      in-memory database.
        """
        if database == ":memory:":
            self._engine = create_engine(
                "sqlite://",
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self._engine = create_engine(
                f"sqlite:///{database}",
                connect_args={"check_same_thread": False},
            )

        Base.metadata.create_all(self._engine)
        self._sessions = sessionmaker(bind=self._engine, expire_on_commit=False)
        logger.info(f"Food store opened: {database}")

    def create_food(self, food: FoodInfo) -> FoodInfo:
        """
        Save a new food.

        Returns:
            Copy of the food with its assigned id.
        """
        record = FoodRecord()
        record.apply(food)
        try:
            with self._sessions.begin() as session:
                session.add(record)
                session.flush()
                return record.to_food()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to create food: {e}") from e

    def get_food(self, user_id: str, food_id: int) -> FoodInfo | None:
        """Get one of a user's foods by id, or None if not found."""
        stmt = select(FoodRecord).where(
            FoodRecord.user_id == user_id,
            FoodRecord.id == food_id,
            FoodRecord.deleted_at.is_(None),
        )
        try:
            with self._sessions() as session:
                record = session.scalars(stmt).first()
                return record.to_food() if record else None
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to get food {food_id}: {e}") from e

    def get_all_foods(self, user_id: str) -> list[FoodInfo]:
        """Get all of a user's foods, oldest first."""
        stmt = (
            select(FoodRecord)
            .where(FoodRecord.user_id == user_id, FoodRecord.deleted_at.is_(None))
            .order_by(FoodRecord.id)
        )
        try:
            with self._sessions() as session:
                return [record.to_food() for record in session.scalars(stmt)]
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to get foods for {user_id}: {e}") from e

    def update_food(self, food: FoodInfo) -> FoodInfo:
        """
        Overwrite a saved food with new values.

        Raises:
            ValueError: If the food has no id.
            KeyError: If no live food has that id.
        """
        if food.id is None:
            raise ValueError("Cannot update a food without an id")

        try:
            with self._sessions.begin() as session:
                record = session.get(FoodRecord, food.id)
                if record is None or record.deleted_at is not None:
                    raise KeyError(f"Food not found: {food.id}")
                record.apply(food)
                session.flush()
                return record.to_food()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to update food {food.id}: {e}") from e

    def delete_food(self, food_id: int) -> bool:
        """
        Delete a food by id.

        Returns:
            True if a live food was deleted.
        """
        try:
            with self._sessions.begin() as session:
                record = session.get(FoodRecord, food_id)
                if record is None or record.deleted_at is not None:
                    return False
                record.deleted_at = _utcnow()
                return True
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to delete food {food_id}: {e}") from e

    def close(self) -> None:
        """Release database connections."""
        self._engine.dispose()
