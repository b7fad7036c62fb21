import json
import os
from typing import Any

import pytest

from jsonexec.backend import _VALID_WRITE_STRATEGIES

SAMPLE_DOCUMENT: dict[str, Any] = {
    "store": {
        "book": [
            {
                "category": "reference",
                "author": "Nigel Rees",
                "title": "Sayings of the Century",
                "price": 8.95,
            },
            {
                "category": "fiction",
                "author": "Evelyn Waugh",
                "title": "Sword of Honour",
                "price": 12.99,
            },
            {
                "category": "fiction",
                "author": "Herman Melville",
                "title": "Moby Dick",
                "isbn": "0-553-21311-3",
                "price": 8.99,
            },
            {
                "category": "fiction",
                "author": "J. R. R. Tolkien",
                "title": "The Lord of the Rings",
                "isbn": "0-395-19395-8",
                "price": 22.99,
            },
        ],
        "bicycle": {"color": "red", "price": 19.95},
    },
    "expensive": 10,
    "some_integers": [1, 2, 3, 4],
}


def _discover_write_strategies() -> list[str]:
    requested = os.getenv("JSONEXEC_TEST_WRITE_STRATEGIES")
    if requested is None:
        return sorted(_VALID_WRITE_STRATEGIES)

    requested_ids = [item.strip() for item in requested.split(",") if item.strip()]
    missing = [
        strategy for strategy in requested_ids if strategy not in _VALID_WRITE_STRATEGIES
    ]
    if missing:
        raise RuntimeError(
            "Requested write strategies are unknown: "
            f"{', '.join(missing)}. Available: {', '.join(sorted(_VALID_WRITE_STRATEGIES))}"
        )
    return requested_ids


_WRITE_STRATEGIES = _discover_write_strategies()


@pytest.fixture(params=_WRITE_STRATEGIES)
def write_strategy(request: pytest.FixtureRequest) -> str:
    return request.param


@pytest.fixture
def sample_json() -> str:
    return json.dumps(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_document() -> dict[str, Any]:
    return json.loads(json.dumps(SAMPLE_DOCUMENT))
