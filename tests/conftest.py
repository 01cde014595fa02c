from collections.abc import Iterator

import pytest

from cfb_trends.runtime_config import set_current_runtime_config


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> Iterator[None]:
    set_current_runtime_config(None)
    yield
    set_current_runtime_config(None)
