"""
Storage access for income and expense records and for users.

Views and the reporting code only talk to the abstract interfaces below, so
the MySQL-backed implementations can be swapped for the in-memory ones in
tests and local demos.
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

import mysql.connector

from models import Kind, NewRecord, Record, DateRange, User

logger = logging.getLogger(__name__)

TABLES = {
    Kind.INCOME: 'income',
    Kind.EXPENSE: 'expenses',
}


class RepositoryError(Exception):
    """Raised when the backing store fails to answer a query or insert."""


class TransactionRepository(ABC):
    """Range reads and inserts over the `income` and `expenses` collections."""

    @abstractmethod
    def fetch(self, kind: Kind, date_range: Optional[DateRange] = None) -> List[Record]:
        """
        Return records of `kind` whose date lies in `date_range` (inclusive),
        newest first. `None` returns the whole collection.
        """

    @abstractmethod
    def insert_many(self, kind: Kind, records: Iterable[NewRecord]) -> List[Record]:
        """Insert records and return them as stored."""

    @abstractmethod
    def earliest_date(self) -> Optional[date]:
        """Oldest record date across both collections, or None if both are empty."""

    def fetch_income(self, date_range: Optional[DateRange] = None) -> List[Record]:
        return self.fetch(Kind.INCOME, date_range)

    def fetch_expenses(self, date_range: Optional[DateRange] = None) -> List[Record]:
        return self.fetch(Kind.EXPENSE, date_range)

    def insert(self, kind: Kind, record: NewRecord) -> Record:
        return self.insert_many(kind, [record])[0]


class UserRepository(ABC):

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def create_user(self, name: str, email: str, password_hash: str) -> User:
        pass


def _connect(pool):
    try:
        return pool.get_connection()
    except mysql.connector.Error as e:
        raise RepositoryError(f"No database connection available: {e}") from e


def _row_to_record(row: dict) -> Record:
    return Record(
        id=str(row['id']),
        created_at=row['created_at'],
        date=row['date'],
        amount=Decimal(row['amount']),
        description=row['description'],
        category=row['category'],
    )


class MySQLTransactionRepository(TransactionRepository):
    """Reads and writes through a `mysql.connector` connection pool."""

    def __init__(self, pool):
        self.pool = pool

    def fetch(self, kind, date_range=None):
        table = TABLES[kind]
        sql = f"SELECT id, created_at, date, amount, description, category FROM {table}"
        params = ()
        if date_range is not None:
            sql += " WHERE date >= %s AND date <= %s"
            params = (date_range.start_date, date_range.end_date)
        sql += " ORDER BY date DESC"

        conn = _connect(self.pool)
        try:
            with conn.cursor(dictionary=True) as cur:
                cur.execute(sql, params)
                return [_row_to_record(row) for row in cur.fetchall()]
        except mysql.connector.Error as e:
            raise RepositoryError(f"Failed to fetch {table}: {e}") from e
        finally:
            conn.close()

    def insert_many(self, kind, records):
        table = TABLES[kind]
        conn = _connect(self.pool)
        try:
            with conn.cursor(dictionary=True) as cur:
                ids = []
                for record in records:
                    cur.execute(
                        f"INSERT INTO {table} (date, amount, description, category) VALUES (%s, %s, %s, %s)",
                        (record.date, record.amount, record.description, record.category)
                    )
                    ids.append(cur.lastrowid)
                conn.commit()

                stored = []
                for row_id in ids:
                    cur.execute(
                        f"SELECT id, created_at, date, amount, description, category FROM {table} WHERE id = %s",
                        (row_id,)
                    )
                    stored.append(_row_to_record(cur.fetchone()))
                return stored
        except mysql.connector.Error as e:
            try:
                conn.rollback()
                logger.warning("Rolled back insert into %s", table)
            except mysql.connector.Error:
                logger.warning("Rollback of insert into %s failed", table, exc_info=True)
            raise RepositoryError(f"Failed to insert into {table}: {e}") from e
        finally:
            conn.close()

    def earliest_date(self):
        conn = _connect(self.pool)
        try:
            with conn.cursor(dictionary=True) as cur:
                dates = []
                for table in TABLES.values():
                    cur.execute(f"SELECT MIN(date) AS earliest FROM {table}")
                    row = cur.fetchone()
                    if row and row['earliest'] is not None:
                        dates.append(row['earliest'])
                return min(dates) if dates else None
        except mysql.connector.Error as e:
            raise RepositoryError(f"Failed to find the oldest record: {e}") from e
        finally:
            conn.close()


class MySQLUserRepository(UserRepository):

    def __init__(self, pool):
        self.pool = pool

    def find_by_email(self, email):
        conn = _connect(self.pool)
        try:
            with conn.cursor(dictionary=True) as cur:
                cur.execute("SELECT id, name, email, password_hash FROM users WHERE email=%s", (email,))
                row = cur.fetchone()
        except mysql.connector.Error as e:
            raise RepositoryError(f"Failed to look up user: {e}") from e
        finally:
            conn.close()
        if not row:
            return None
        return User(id=row['id'], name=row['name'], email=row['email'], password_hash=row['password_hash'])

    def create_user(self, name, email, password_hash):
        conn = _connect(self.pool)
        try:
            with conn.cursor() as cur:
                cur.execute(
                    "INSERT INTO users (name, email, password_hash) VALUES (%s, %s, %s)",
                    (name, email, password_hash)
                )
                conn.commit()
                user_id = cur.lastrowid
        except mysql.connector.Error as e:
            raise RepositoryError(f"Failed to create user: {e}") from e
        finally:
            conn.close()
        return User(id=user_id, name=name, email=email, password_hash=password_hash)


class InMemoryTransactionRepository(TransactionRepository):
    """List-backed repository for tests and demos."""

    def __init__(self):
        self._records: Dict[Kind, List[Record]] = {kind: [] for kind in Kind}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def fetch(self, kind, date_range=None):
        with self._lock:
            rows = list(self._records[kind])
        if date_range is not None:
            rows = [r for r in rows if date_range.contains(r.date)]
        return sorted(rows, key=lambda r: r.date, reverse=True)

    def insert_many(self, kind, records):
        stored = []
        with self._lock:
            for record in records:
                row = Record(
                    id=str(next(self._ids)),
                    created_at=datetime.now(),
                    date=record.date,
                    amount=Decimal(record.amount),
                    description=record.description,
                    category=record.category,
                )
                self._records[kind].append(row)
                stored.append(row)
        return stored

    def earliest_date(self):
        with self._lock:
            dates = [r.date for rows in self._records.values() for r in rows]
        return min(dates) if dates else None


class InMemoryUserRepository(UserRepository):

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._ids = itertools.count(1)

    def find_by_email(self, email):
        return self._users.get(email)

    def create_user(self, name, email, password_hash):
        user = User(id=next(self._ids), name=name, email=email, password_hash=password_hash)
        self._users[email] = user
        return user
