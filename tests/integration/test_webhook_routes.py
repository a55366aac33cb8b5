COMPLETED = "checkout.session.completed"


def _post(client, payload, header, **headers):
    headers = {"content-type": "application/json", **headers}
    if header is not None:
        headers["stripe-signature"] = header
    return client.post("/webhook", content=payload, headers=headers)


def test_invalid_signature_is_401_without_side_effects(client, store_client, signed):
    payload, _ = signed(COMPLETED, {"id": "cs_1", "metadata": {"userId": "u1"}})
    res = _post(client, payload, "t=1,v1=deadbeef")
    assert res.status_code == 401
    assert res.json() == {"success": False}
    store_client.orders_table.insert.assert_not_called()


def test_missing_signature_is_401(client, store_client, signed):
    payload, _ = signed(COMPLETED, {"id": "cs_1", "metadata": {"userId": "u1"}})
    res = _post(client, payload, None)
    assert res.status_code == 401
    assert res.json() == {"success": False}
    store_client.orders_table.insert.assert_not_called()


def test_completed_checkout_creates_exactly_one_order(client, store_client, signed):
    payload, header = signed(COMPLETED, {"id": "cs_test_1", "metadata": {"userId": "u1"}})
    res = _post(client, payload, header)

    assert res.status_code == 200
    assert res.json() == {"success": True}
    assert store_client.orders_table.insert.call_count == 1
    document = store_client.orders_table.insert.call_args.args[0]
    assert document["userId"] == "u1"
    assert document["orderId"] == "cs_test_1"
    store_client.schema.assert_called_with("orders")


def test_other_event_types_create_nothing(client, store_client, signed):
    payload, header = signed("payment_intent.succeeded", {"id": "pi_1"})
    res = _post(client, payload, header)
    assert res.status_code == 200
    assert res.json() == {"success": True}
    store_client.orders_table.insert.assert_not_called()


def test_duplicate_delivery_does_not_duplicate_order(client, store_client, signed):
    from types import SimpleNamespace

    payload, header = signed(COMPLETED, {"id": "cs_test_1", "metadata": {"userId": "u1"}})
    existing = SimpleNamespace(data=[{"id": "doc-0", "userId": "u1", "orderId": "cs_test_1"}])
    lookup = store_client.orders_table.select.return_value.eq.return_value.limit.return_value.execute
    lookup.return_value = existing

    res = _post(client, payload, header)
    assert res.status_code == 200
    assert res.json() == {"success": True}
    store_client.orders_table.insert.assert_not_called()


def test_invocation_key_header_is_used_for_store(client, store_client, signed):
    payload, header = signed(COMPLETED, {"id": "cs_test_1", "metadata": {"userId": "u1"}})
    res = _post(client, payload, header, **{"x-appwrite-key": "key-1"})
    assert res.status_code == 200
    assert store_client.calls["api_keys"]
    assert set(store_client.calls["api_keys"]) == {"key-1"}


def test_store_failure_is_generic_500(client, store_client, signed):
    store_client.orders_table.insert.side_effect = Exception("db down")
    payload, header = signed(COMPLETED, {"id": "cs_test_1", "metadata": {"userId": "u1"}})
    res = _post(client, payload, header)
    assert res.status_code == 500
    assert res.json() == {"detail": "Internal Server Error"}
