"""Tests for the loguru sink configuration."""

import sys

import pytest
from loguru import logger

from tutorlink.config.settings import Settings
from tutorlink.core.logger import render_context, setup_logger


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "logs" / "tutorlink.log"
    setup_logger(Settings(log_file=str(path), log_level="DEBUG"))
    yield path
    logger.remove()
    logger.add(sys.stderr)


def _last_line(path) -> str:
    return path.read_text().strip().splitlines()[-1]


def test_acting_user_is_rendered(log_file):
    logger.bind(acting_user_id="staff-7").info("Contract c-1 status pending -> active")

    line = _last_line(log_file)
    assert "Contract c-1 status pending -> active" in line
    assert line.endswith("acting_user_id=staff-7")


def test_braces_in_context_are_kept_verbatim(log_file):
    logger.bind(main_tutor_id="tutor-{0}").info("Assigned main tutor")

    assert _last_line(log_file).endswith("main_tutor_id=tutor-{0}")


def test_no_context_no_suffix(log_file):
    logger.info("Plain message")

    assert _last_line(log_file).endswith("- Plain message")


def test_render_context_sorts_and_skips_private_keys():
    assert render_context({"parent_id": "p-1", "acting_user_id": "u-1", "_context": "x"}) == (
        "acting_user_id=u-1 parent_id=p-1"
    )
