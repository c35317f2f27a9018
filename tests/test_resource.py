import pytest

from conftest import FakeClient
from increase.client import set_default_client
from increase.errors import DefinitionError
from increase.resource import Endpoint, Resource, endpoint, register
from increase.resources.catalog import RESOURCES, lookup
from increase.resources.digital_wallet_tokens import DigitalWalletTokens
from increase.resources.event_subscriptions import EventSubscriptions
from increase.resources.events import Events


def page(items, cursor=None):
    return {"data": list(items), "next_cursor": cursor}


class Accounts(Resource):
    create = Endpoint.create()
    list = Endpoint.list()
    retrieve = Endpoint.retrieve()
    close = endpoint("POST", with_="id")
    balance = endpoint("GET", to="balance", with_="id")
    transactions = endpoint("GET", to=("simulations", "transactions"), with_=("id", "pagination"))


def test_resource_urls():
    assert Events.resource_url() == "/events"
    assert EventSubscriptions.resource_url() == "/event_subscriptions"
    assert DigitalWalletTokens.resource_url() == "/digital_wallet_tokens"


def test_registry_lists_operations():
    specs = EventSubscriptions.endpoints()
    assert set(specs) == {"create", "list", "update", "retrieve"}
    assert specs["create"].http_method == "POST"
    assert specs["list"].paginated is True
    assert specs["update"].http_method == "PATCH"
    assert specs["update"].requires_id is True
    assert specs["retrieve"].url_segments == ()

    # sibling classes keep separate tables
    assert set(Events.endpoints()) == {"list", "retrieve"}
    assert Resource.endpoints() == {}


def test_instance_operations_build_paths():
    client = FakeClient({"id": "a"}, {"id": "a"}, {"id": "a"}, {"id": "a"})
    acct = Accounts(client=client)

    acct.retrieve("acct_1")
    acct.close("acct_1")
    acct.balance("acct_1")
    acct.create({"name": "x"})

    calls = [(c.method, c.path) for c in client.connection.calls]
    assert calls == [
        ("GET", "/accounts/acct_1"),
        ("POST", "/accounts/acct_1/close"),
        ("GET", "/accounts/acct_1/balance"),
        ("POST", "/accounts"),
    ]


def test_two_segment_paginated_operation():
    client = FakeClient(page([1, 2], "c"), page([3], None))
    result = Accounts(client=client).transactions("acct_1", {"limit": "all"})

    assert result == [1, 2, 3]
    assert client.connection.calls[0].path == "/accounts/simulations/acct_1/transactions"


def test_class_level_call_uses_default_client():
    client = FakeClient(page(["a", "b"], "x"))
    set_default_client(client)

    assert Events.list() == ["a", "b"]
    assert len(client.connection.calls) == 1
    assert client.connection.calls[0].path == "/events"


def test_list_with_limit_through_operation():
    client = FakeClient(page(["a", "b"], "c1"), page(["d", "e"], None))
    assert Events(client=client).list({"limit": 3}) == ["a", "b", "d"]
    assert len(client.connection.calls) == 2


def test_pages_generator_through_operation():
    client = FakeClient(page(["a"], "c1"), page(["b"], None))
    pages = Events(client=client).list.pages({"limit": "all"})
    assert list(pages) == [["a"], ["b"]]


def test_callback_on_create_returns_raw_response():
    body = {"id": "sub_1", "status": "active"}
    client = FakeClient(body)
    seen = []

    ret = EventSubscriptions(client=client).create({"url": "https://x"}, callback=seen.append)

    assert seen == [body]
    assert ret == body
    assert ret is seen[0]
    assert len(client.connection.calls) == 1


def test_missing_id_is_a_type_error():
    with pytest.raises(TypeError):
        Events(client=FakeClient()).retrieve()


def test_invalid_shapes_fail_at_class_definition():
    with pytest.raises(DefinitionError):

        class TooDeep(Resource):
            x = endpoint("GET", to=("a", "b", "c"), with_="id")

    with pytest.raises(DefinitionError):

        class NoId(Resource):
            x = endpoint("GET", to=("a", "b"))

    with pytest.raises(DefinitionError):

        class BadVerb(Resource):
            x = endpoint("FETCH")

    with pytest.raises(DefinitionError):

        class BadSegment(Resource):
            x = endpoint("POST", to="a/b")


def test_register_adds_operation_once():
    class Cards(Resource):
        retrieve = Endpoint.retrieve()

    register(Cards, "details", "GET", with_="id")
    assert "details" in Cards.endpoints()

    client = FakeClient({"pan": "4242"})
    assert Cards(client=client).details("card_1")["pan"] == "4242"
    assert client.connection.calls[0].path == "/cards/card_1/details"

    with pytest.raises(DefinitionError):
        register(Cards, "details", "GET", with_="id")
    with pytest.raises(DefinitionError):
        register(Cards, "bad", "GET", to=("a", "b"))


def test_resource_base_is_abstract():
    with pytest.raises(NotImplementedError):
        Resource(client=FakeClient())
    with pytest.raises(NotImplementedError):
        Resource.resource_name()


def test_with_config_accepts_mapping():
    res = Events.with_config({"api_key": "k", "environment": "sandbox"})
    assert res.client.config.resolved_base_url == "https://sandbox.increase.com"
    res.client.close()


def test_catalog_lookup():
    assert lookup("events") is Events
    assert lookup("Event-Subscriptions") is EventSubscriptions
    assert set(RESOURCES) == {"events", "event_subscriptions", "digital_wallet_tokens", "pending_transactions"}
    with pytest.raises(KeyError):
        lookup("nope")


def test_operation_repr():
    assert repr(Accounts.close) == "<operation Accounts.close POST /{id}/close>"
