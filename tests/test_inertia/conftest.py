from collections.abc import Generator

import pytest
from litestar.testing import RequestFactory

from litestar_inertia.config import InertiaConfig
from litestar_inertia.plugin import InertiaPlugin


@pytest.fixture
def inertia_config() -> Generator[InertiaConfig, None, None]:
    yield InertiaConfig(root_template="index.html.j2")


@pytest.fixture
def inertia_plugin(inertia_config: InertiaConfig) -> Generator[InertiaPlugin, None, None]:
    yield InertiaPlugin(config=inertia_config)


@pytest.fixture
def request_factory() -> RequestFactory:
    return RequestFactory()
