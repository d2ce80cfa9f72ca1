from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.package_builder import PackageBuilder


@pytest.fixture
def package_builder(tmp_path: Path) -> PackageBuilder:
    """Provide a reusable packages tree rooted at the pytest tmp_path."""
    return PackageBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_admobgen_logger() -> Iterator[None]:
    # CLI tests install handlers bound to captured streams and temp files.
    yield
    logger = logging.getLogger("admobgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
