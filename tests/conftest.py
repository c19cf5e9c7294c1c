import pytest

from orbitalbase import classpath
from orbitalbase import persistent
from orbitalbase import properties


@pytest.fixture(autouse=True)
def clean_state():
    properties.reset()
    persistent.set_provider(None)
    classpath.set_loader(None)
    yield
    properties.reset()
    persistent.set_provider(None)
    classpath.set_loader(None)
