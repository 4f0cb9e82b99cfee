import pytest

from teldim.export.snapshot import build_snapshot
from teldim.sizing.models import default_parameters
from teldim.sizing.sizer import dimension


@pytest.fixture
def gsm_snapshot():
    params = default_parameters("gsm")
    return build_snapshot("gsm", params, dimension("gsm", params))


@pytest.fixture
def microwave_snapshot():
    params = default_parameters("hertzien")
    return build_snapshot("hertzien", params, dimension("hertzien", params))
