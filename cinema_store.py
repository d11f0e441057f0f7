# Persistence for screens and tickets, using a SQLite database through SQLAlchemy.
# Each store behaves like an append-only list of records: reset, append, read back, count.

import csv
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import create_engine, Column, Integer, String, CheckConstraint
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from cinema import Screen, Ticket, PersistenceError, DuplicateScreenIdError

# Initialize SQLAlchemy base class for ORM models
Base = declarative_base()


class ScreenRecord(Base):
    """ORM model for a screen's configuration (seat occupancy is not stored here)."""
    __tablename__ = 'Screens'

    record_id = Column(Integer, primary_key=True, autoincrement=True)  # Append order
    screen_id = Column(Integer, unique=True, nullable=False)
    movie_title = Column(String(200), nullable=False)
    row_count = Column(Integer, nullable=False)
    column_count = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("row_count > 0 AND column_count > 0", name='check_screen_size'),
    )

    @classmethod
    def from_domain(cls, screen):
        return cls(
            screen_id=screen.screen_id,
            movie_title=screen.movie_title,
            row_count=screen.rows,
            column_count=screen.columns,
        )

    def to_domain(self):
        return Screen(self.screen_id, self.movie_title, self.row_count, self.column_count)


class TicketRecord(Base):
    """ORM model for one confirmed ticket in the basket."""
    __tablename__ = 'Tickets'

    record_id = Column(Integer, primary_key=True, autoincrement=True)
    movie_title = Column(String(200), nullable=False)
    seat_row = Column(Integer, nullable=False)
    seat_column = Column(Integer, nullable=False)
    screen_id = Column(Integer, nullable=False)  # Plain value, the screen may be reseeded

    @classmethod
    def from_domain(cls, ticket):
        return cls(
            movie_title=ticket.movie_title,
            seat_row=ticket.row,
            seat_column=ticket.column,
            screen_id=ticket.screen_id,
        )

    def to_domain(self):
        return Ticket(
            movie_title=self.movie_title,
            row=self.seat_row,
            column=self.seat_column,
            screen_id=self.screen_id,
        )


class RecordStore:
    """Ordered collection of domain records backed by one table."""

    def __init__(self, session_factory, model):
        self._session_factory = session_factory
        self._model = model
        self.name = model.__tablename__

    @contextmanager
    def _session(self, action):
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Could not {} {}: {}", action, self.name, e)
            raise PersistenceError(f"Could not {action} {self.name}.") from e
        finally:
            session.close()

    def reset(self):
        """Remove every record."""
        with self._session('reset') as session:
            session.query(self._model).delete()
            session.commit()

    def append(self, record):
        with self._session('write to') as session:
            session.add(self._model.from_domain(record))
            session.commit()

    def read_all(self):
        """All records, in the order they were appended."""
        with self._session('read') as session:
            rows = session.query(self._model).order_by(self._model.record_id).all()
            try:
                return [row.to_domain() for row in rows]
            except (TypeError, ValueError) as e:
                logger.error("Malformed record in {}: {}", self.name, e)
                raise PersistenceError(f"{self.name} contains a malformed record.") from e

    def count(self):
        with self._session('count') as session:
            return session.query(self._model).count()


def open_stores(database_url):
    """Connect to the database, create missing tables and return (screen_store, ticket_store)."""
    try:
        engine = create_engine(database_url)
        Base.metadata.create_all(engine)  # Create tables if missing
    except SQLAlchemyError as e:
        logger.error("Could not open database {}: {}", database_url, e)
        raise PersistenceError("Could not open the booking database.") from e
    Session = sessionmaker(bind=engine)
    return RecordStore(Session, ScreenRecord), RecordStore(Session, TicketRecord)


def read_screens_csv(csv_filename):
    """Parse screen definitions from a CSV file: screen_id,movie_title,rows,columns.

    A header line and malformed lines are skipped.
    """
    screens = []
    try:
        with open(csv_filename, 'r', newline='', encoding='utf-8') as f:
            for line_number, csv_row in enumerate(csv.reader(f), start=1):
                if not csv_row or csv_row[0].strip().lower() == 'screen_id':
                    continue
                try:
                    screen_id, title, rows, columns = (cell.strip() for cell in csv_row)
                    screens.append(Screen(int(screen_id), title, int(rows), int(columns)))
                except ValueError as e:
                    logger.warning("Skipping line {} of {}: {}", line_number, csv_filename, e)
    except OSError as e:
        raise PersistenceError(f"Could not read seed file {csv_filename}.") from e
    return screens


def seed_screens(screen_store, csv_filename):
    """Populate an empty screen store from a CSV file.

    Returns (added, duplicates). A store that already holds screens is left alone.
    """
    if screen_store.count() > 0:
        return 0, []

    added, duplicates, seen = 0, [], set()
    for screen in read_screens_csv(csv_filename):
        if screen.screen_id in seen:
            duplicates.append(DuplicateScreenIdError(screen.screen_id))
            continue
        seen.add(screen.screen_id)
        screen_store.append(screen)
        added += 1
    logger.info("Seeded {} screens from {} ({} duplicates skipped)", added, csv_filename, len(duplicates))
    return added, duplicates


class InputRecorder:
    """Keeps a plain-text transcript of everything the customer typed."""

    def __init__(self, filename):
        self.filename = filename

    def record(self, line):
        try:
            with open(self.filename, 'a', encoding='utf-8') as f:
                f.write(f"{line}\n")
        except OSError as e:
            logger.error("Could not record input to {}: {}", self.filename, e)
            raise PersistenceError(f"Error writing to file {self.filename}.") from e
