"""Local measurement history backed by SQLAlchemy.

The table keeps a short rolling window of readings. Readers observe it through
``LiveQuery`` subscriptions, which are re-delivered the full ordered snapshot
every time the table changes.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

from sqlalchemy import (
    Column,
    Engine,
    Float,
    Integer,
    MetaData,
    Table,
    Text,
    create_engine,
    delete,
    func,
    insert,
    select,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from tempodica._logging import get_logger
from tempodica.exceptions import StorageError
from tempodica.models.measurement import MeasuredWeather

metadata = MetaData()

measured_weather = Table(
    "measured_weather",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("temperature", Float, nullable=False),
    Column("description", Text, nullable=False),
    Column("timestamp", Integer, nullable=False),
    sqlite_autoincrement=True,
)

MeasurementObserver = Callable[[list[MeasuredWeather]], None]


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def create_history_engine(url: str = "sqlite://") -> Engine:
    """Create an engine for the history database.

    In-memory SQLite URLs share one connection so every caller sees the same
    database. SQLite connections may be used from worker threads.
    """
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url)


class Subscription:
    """Handle returned by ``LiveQuery.subscribe``."""

    def __init__(self, query: LiveQuery, observer: MeasurementObserver) -> None:
        self._query = query
        self._observer = observer
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Stop receiving updates. Safe to call more than once."""
        if self._active:
            self._active = False
            self._query._detach(self)

    def _deliver(self, snapshot: list[MeasuredWeather]) -> None:
        if self._active:
            self._observer(snapshot)


class LiveQuery:
    """The most recent ``limit`` measurements, newest first, as a live view.

    Observers are called on the thread that performed the write.
    """

    def __init__(self, store: HistoryStore, limit: int) -> None:
        self._store = store
        self._limit = limit
        self._subscriptions: list[Subscription] = []

    @property
    def limit(self) -> int:
        return self._limit

    def snapshot(self) -> list[MeasuredWeather]:
        """One-shot read of the current window."""
        return self._store._read_recent(self._limit)

    def subscribe(self, observer: MeasurementObserver) -> Subscription:
        """Register ``observer``; it receives the current window right away."""
        subscription = Subscription(self, observer)
        with self._store._lock:
            if not self._subscriptions:
                self._store._live_queries.append(self)
            self._subscriptions.append(subscription)
        subscription._deliver(self.snapshot())
        return subscription

    def _detach(self, subscription: Subscription) -> None:
        with self._store._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)
            if not self._subscriptions and self in self._store._live_queries:
                self._store._live_queries.remove(self)

    def _refresh(self) -> None:
        with self._store._lock:
            subscriptions = list(self._subscriptions)
        if not subscriptions:
            return
        snapshot = self.snapshot()
        for subscription in subscriptions:
            # Observer failures are logged; remaining observers still receive the snapshot.
            try:
                subscription._deliver(snapshot)
            except Exception as exc:
                get_logger().error(
                    "OBSERVER FAIL: %r -> %s: %s",
                    subscription._observer, type(exc).__name__, exc,
                )


class HistoryStore:
    """Append-only table of recent measurements with bounded retention.

    Usage:
        store = HistoryStore(create_history_engine("sqlite:///tempodica.db"))
        store.insert(24.5, "Clear sky")
        store.trim_to_keep(5)
        feed = store.recent_measurements(5)
        subscription = feed.subscribe(print)
        subscription.unsubscribe()
    """

    def __init__(
        self,
        engine: Engine,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._engine = engine
        self._clock = clock or _epoch_millis
        self._lock = threading.RLock()
        self._live_queries: list[LiveQuery] = []
        try:
            metadata.create_all(engine)
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to create history table: {exc}") from exc

    def insert(self, temperature: float, description: str) -> MeasuredWeather:
        """Append a measurement stamped with the current time."""
        timestamp = self._clock()
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    insert(measured_weather).values(
                        temperature=temperature,
                        description=description,
                        timestamp=timestamp,
                    )
                )
                row_id = result.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to insert measurement: {exc}") from exc
        self._notify()
        return MeasuredWeather(
            id=row_id,
            temperature=temperature,
            description=description,
            timestamp=timestamp,
        )

    def trim_to_keep(self, keep: int) -> int:
        """Delete everything but the ``keep`` newest rows; return how many were removed."""
        if keep < 0:
            raise ValueError(f"keep must be >= 0, got {keep}")
        newest = (
            select(measured_weather.c.id)
            .order_by(measured_weather.c.timestamp.desc(), measured_weather.c.id.desc())
            .limit(keep)
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    delete(measured_weather).where(measured_weather.c.id.not_in(newest))
                )
                removed = result.rowcount
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to trim measurements: {exc}") from exc
        if removed:
            self._notify()
        return removed

    def recent_measurements(self, limit: int) -> LiveQuery:
        """Live view of the ``limit`` newest measurements, newest first."""
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        return LiveQuery(self, limit)

    def count(self) -> int:
        try:
            with self._engine.connect() as conn:
                return conn.execute(
                    select(func.count()).select_from(measured_weather)
                ).scalar_one()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to count measurements: {exc}") from exc

    def _read_recent(self, limit: int) -> list[MeasuredWeather]:
        query = (
            select(measured_weather)
            .order_by(measured_weather.c.timestamp.desc(), measured_weather.c.id.desc())
            .limit(limit)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read measurements: {exc}") from exc
        return [MeasuredWeather.model_validate(dict(row)) for row in rows]

    def _notify(self) -> None:
        with self._lock:
            queries = list(self._live_queries)
        for query in queries:
            query._refresh()
