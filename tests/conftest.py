import pytest

from dprpwg_core.protocol import OUTPUT_DIG, OUTPUT_LOW, OUTPUT_SYM, OUTPUT_UPP


@pytest.fixture
def full_alphabet() -> bytes:
    return OUTPUT_LOW + OUTPUT_DIG + OUTPUT_SYM + OUTPUT_UPP
