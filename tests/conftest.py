from __future__ import annotations

from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / "data"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--fhir-base-url",
        action="store",
        default=None,
        help=(
            "Base URL of a live FHIR server. "
            "Tests marked 'network' are skipped without it."
        ),
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("--fhir-base-url"):
        return

    skip_network = pytest.mark.skip(reason="requires --fhir-base-url")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


@pytest.fixture
def fhir_base_url(request: pytest.FixtureRequest) -> str:
    return request.config.getoption("--fhir-base-url")


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR
