"""Tests for the session context manager and settings."""

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

import tutorlink.db.session as session_module
from tutorlink.config.settings import Settings
from tutorlink.core.errors import InvalidArgumentError
from tutorlink.db.models import Base, Curriculum


@pytest.fixture
def scoped_factory(monkeypatch):
    """Route get_session() to a private in-memory database."""
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    monkeypatch.setattr(session_module, "_get_session_local", lambda: factory)
    yield factory
    engine.dispose()


def _names(factory) -> list[str]:
    with factory() as session:
        return list(session.execute(select(Curriculum.curriculum_name)).scalars().all())


def test_commits_pending_changes(scoped_factory):
    with session_module.get_session() as session:
        session.add(Curriculum(curriculum_name="Grade 4 Math"))

    assert _names(scoped_factory) == ["Grade 4 Math"]


def test_domain_error_rolls_back_and_propagates(scoped_factory):
    with pytest.raises(InvalidArgumentError):
        with session_module.get_session() as session:
            session.add(Curriculum(curriculum_name="Discarded"))
            raise InvalidArgumentError("bad input")

    assert _names(scoped_factory) == []


def test_unexpected_error_rolls_back_and_propagates(scoped_factory):
    with pytest.raises(RuntimeError):
        with session_module.get_session() as session:
            session.add(Curriculum(curriculum_name="Discarded"))
            raise RuntimeError("boom")

    assert _names(scoped_factory) == []


class TestSettings:
    def test_defaults(self):
        config = Settings()
        assert config.forecast_days_per_unit == 14
        assert config.weekday_locale == "vi"

    def test_unknown_locale_falls_back(self):
        assert Settings(weekday_locale="fr").weekday_locale == "vi"

    def test_invalid_log_level_falls_back(self):
        assert Settings(log_level="verbose").log_level == "INFO"

    def test_days_per_unit_must_be_positive(self):
        with pytest.raises(ValueError):
            Settings(forecast_days_per_unit=0)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FORECAST_DAYS_PER_UNIT", "7")
        monkeypatch.setenv("WEEKDAY_LOCALE", "EN")
        config = Settings()
        assert config.forecast_days_per_unit == 7
        assert config.weekday_locale == "en"
