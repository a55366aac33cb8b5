import pytest

from checkout_backend.errors import GatewayCallFailed
from checkout_backend.results import AdapterResult


def test_ok_result_is_truthy_and_unwraps():
    res = AdapterResult.ok("cus_123")
    assert res
    assert res.unwrap(GatewayCallFailed) == "cus_123"


def test_fail_result_unwrap_raises_chained_error():
    cause = ValueError("boom")
    res = AdapterResult.fail("refused", cause)
    assert not res
    with pytest.raises(GatewayCallFailed) as exc:
        res.unwrap(GatewayCallFailed)
    assert str(exc.value) == "refused"
    assert exc.value.__cause__ is cause
