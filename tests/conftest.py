"""Root conftest for all tests.

Shared fixtures: a transactional in-memory SQLite session and a small
factory for seeding users, contracts, sessions and reports.
"""

from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from tutorlink.db.models import (
    Base,
    Center,
    Child,
    Contract,
    Curriculum,
    DailyReport,
    PaymentPackage,
    TutoringSession,
    Unit,
    User,
)


# Enable foreign key constraints for SQLite
@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints in SQLite connections."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="function")
def db_session(monkeypatch):
    """
    Provides a transactional in-memory SQLite DB session for tests.

    This fixture:
    - Creates an isolated in-memory SQLite database per test
    - Patches the engine getters and get_session() to use it
    - Uses transaction rollback for cleanup; repository commits stay inside
      the outer transaction

    Usage:
        def test_something(db_session):
            db_session.add(User(full_name="Parent"))
            db_session.flush()
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    def mock_get_engine():
        return engine

    monkeypatch.setattr("tutorlink.db.session._get_engine", mock_get_engine)
    monkeypatch.setattr("tutorlink.db.session.get_engine", mock_get_engine)

    Base.metadata.create_all(engine)

    connection = engine.connect()
    transaction = connection.begin()

    test_session_local = sessionmaker(bind=connection, autocommit=False, autoflush=False)
    session = test_session_local()

    @contextmanager
    def mock_get_session():
        yield session

    import tutorlink.db.session as session_module

    monkeypatch.setattr(session_module, "get_session", mock_get_session)

    try:
        yield session
    finally:
        session.rollback()
        if transaction.is_active:
            transaction.rollback()
        session.close()
        connection.close()
        engine.dispose()


class Factory:
    """Creates persisted rows with sensible defaults."""

    def __init__(self, session):
        self.session = session

    def _save(self, obj):
        self.session.add(obj)
        self.session.flush()
        return obj

    def user(self, full_name: str = "Nguyen Van A", role: str = "parent") -> User:
        return self._save(User(full_name=full_name, role=role))

    def center(self, name: str = "District 1 Center") -> Center:
        return self._save(Center(name=name))

    def child(self, parent: User | None = None, full_name: str = "Be Na") -> Child:
        parent = parent or self.user()
        return self._save(Child(parent_id=parent.id, full_name=full_name))

    def curriculum(self, name: str = "Grade 3 Math") -> Curriculum:
        return self._save(Curriculum(curriculum_name=name))

    def unit(
        self,
        curriculum: Curriculum,
        order: int,
        name: str | None = None,
        is_active: bool = True,
    ) -> Unit:
        return self._save(
            Unit(
                curriculum_id=curriculum.id,
                unit_name=name or f"Unit {order}",
                unit_order=order,
                is_active=is_active,
            )
        )

    def package(
        self,
        curriculum: Curriculum | None = None,
        session_count: int = 10,
        max_reschedule: int = 2,
        duration_days: int | None = 42,
        name: str = "Standard 10",
    ) -> PaymentPackage:
        return self._save(
            PaymentPackage(
                package_name=name,
                curriculum_id=curriculum.id if curriculum else None,
                session_count=session_count,
                max_reschedule=max_reschedule,
                duration_days=duration_days,
                price=Decimal("1500000"),
            )
        )

    def contract(
        self,
        child: Child,
        package: PaymentPackage,
        status: str = "pending",
        start_date: date = date(2024, 1, 1),
        end_date: date = date(2024, 1, 30),
        days_of_week: int = 62,
        main_tutor: User | None = None,
    ) -> Contract:
        return self._save(
            Contract(
                parent_id=child.parent_id,
                child_id=child.id,
                package_id=package.id,
                main_tutor_id=main_tutor.id if main_tutor else None,
                start_date=start_date,
                end_date=end_date,
                start_time=time(16, 0),
                end_time=time(18, 0),
                days_of_week=days_of_week,
                is_online=True,
                video_call_platform="Zoom",
                reschedule_count=package.max_reschedule,
                status=status,
            )
        )

    def session_for(self, contract: Contract, session_date: date, status: str = "scheduled") -> TutoringSession:
        return self._save(
            TutoringSession(
                contract_id=contract.id,
                tutor_id=contract.main_tutor_id,
                session_date=session_date,
                start_time=datetime.combine(session_date, time(16, 0)),
                end_time=datetime.combine(session_date, time(18, 0)),
                is_online=contract.is_online,
                status=status,
            )
        )

    def report(
        self,
        child: Child,
        tutor: User,
        booking: TutoringSession,
        unit: Unit,
        created_date: date,
        on_track: bool = True,
        have_homework: bool = False,
    ) -> DailyReport:
        return self._save(
            DailyReport(
                child_id=child.id,
                tutor_id=tutor.id,
                booking_id=booking.id,
                unit_id=unit.id,
                created_date=created_date,
                on_track=on_track,
                have_homework=have_homework,
            )
        )


@pytest.fixture
def factory(db_session) -> Factory:
    return Factory(db_session)


@pytest.fixture
def enrolled_child(factory):
    """A child with an active contract, a tutor and two weeks of sessions.

    Returns:
        Dict with parent, child, tutor, curriculum, package, contract, sessions
    """
    parent = factory.user("Tran Thi B")
    tutor = factory.user("Le Van Tutor", role="tutor")
    child = factory.child(parent, "Minh")
    curriculum = factory.curriculum()
    package = factory.package(curriculum, session_count=10, duration_days=42)
    contract = factory.contract(child, package, status="active", main_tutor=tutor)
    sessions = [factory.session_for(contract, date(2024, 1, 1) + timedelta(days=i)) for i in range(5)]
    return {
        "parent": parent,
        "tutor": tutor,
        "child": child,
        "curriculum": curriculum,
        "package": package,
        "contract": contract,
        "sessions": sessions,
    }


@pytest.fixture
def file_db(tmp_path):
    """Session factory on a file-backed database where commits are real.

    Use it to check what a failed operation leaves behind: open a fresh
    session after the failing one is closed.
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'tutorlink.db'}")
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def factory_cls() -> type[Factory]:
    return Factory
