"""Global pytest configuration and fixtures."""

import logging
from pathlib import Path

import pytest

from desyde._internal.logging import LOGGER_NAME
from desyde.settings import OptCriterion, Settings


def _clear_desyde_handlers():
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def clean_logging():
    """Reset desyde logging handlers for test isolation."""
    _clear_desyde_handlers()
    yield
    _clear_desyde_handlers()


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    """Input directory holding one application graph."""
    apps = tmp_path / "apps"
    apps.mkdir()
    (apps / "a.hsdf.xml").write_text("<sdf3/>\n")
    return apps


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def base_tokens(input_dir: Path, output_dir: Path) -> list[str]:
    """Minimal valid token list."""
    return ["--inputs", str(input_dir), "--output", str(output_dir)]


@pytest.fixture
def make_settings(input_dir: Path, output_dir: Path):
    """Factory for Settings with the given criteria."""

    def _make(*criteria: OptCriterion, **overrides) -> Settings:
        fields = {
            "inputs_paths": (input_dir,),
            "output_path": output_dir,
            "criteria": tuple(criteria),
        }
        fields.update(overrides)
        return Settings(**fields)

    return _make
