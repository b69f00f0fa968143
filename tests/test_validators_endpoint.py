"""End-to-end tests for GET /cosmos/staking/v1beta1/validators/{address}."""

from decimal import Decimal

from conftest import OTHER_VALIDATOR, VALIDATOR, FakeChainClient

from namada_rest_adapter.errors import UpstreamDecodeError, UpstreamError, UpstreamTimeoutError
from namada_rest_adapter.rpc_models import ValidatorState

PATH = "/cosmos/staking/v1beta1/validators/{}"


def test_jailed_validator(chain, make_client):
    chain.state = ValidatorState.JAILED
    chain.stake = Decimal("1000.5")
    client = make_client(chain)

    response = client.get(PATH.format(VALIDATOR))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    validator = response.json()["validator"]
    assert validator["operator_address"] == VALIDATOR
    assert validator["jailed"] is True
    assert validator["status"] == "JAILED"
    assert validator["tokens"] == "1000.5"
    assert validator["description"] == {
        "moniker": "validator#0001",
        "identity": None,
        "website": "https://validator.example.org",
        "security_contact": "ops@example.org",
        "details": "Reliable validator",
    }
    assert validator["commission"] == {
        "commission_rates": {"rate": "0.05", "max_rate": None, "max_change_rate": "0.01"},
        "update_time": None,
    }


def test_stake_queried_at_current_epoch(chain, make_client):
    client = make_client(chain)

    client.get(PATH.format(VALIDATOR))

    assert ("stake", VALIDATOR, 42) in chain.calls
    assert ("metadata", VALIDATOR, None) in chain.calls
    assert ("state", VALIDATOR, None) in chain.calls


def test_height_consistent_queries_use_epoch(chain, make_client):
    client = make_client(chain, height_consistent=True)

    response = client.get(PATH.format(VALIDATOR))

    assert response.status_code == 200
    assert ("metadata", VALIDATOR, 42) in chain.calls
    assert ("state", VALIDATOR, 42) in chain.calls
    assert ("stake", VALIDATOR, 42) in chain.calls


def test_unknown_validator(make_client):
    chain = FakeChainClient(state=None)
    client = make_client(chain)

    response = client.get(PATH.format(OTHER_VALIDATOR))

    assert response.status_code == 200
    validator = response.json()["validator"]
    assert validator["operator_address"] == OTHER_VALIDATOR
    assert validator["status"] is None
    assert validator["jailed"] is None
    assert validator["tokens"] == "0"
    assert validator["description"]["moniker"] is None
    assert validator["commission"]["commission_rates"]["rate"] is None


def test_missing_metadata_still_succeeds(chain, make_client):
    chain.metadata = None
    client = make_client(chain)

    response = client.get(PATH.format(VALIDATOR))

    assert response.status_code == 200
    description = response.json()["validator"]["description"]
    assert all(value is None for value in description.values())


def test_missing_commission_still_succeeds(chain, make_client):
    chain.commission = None
    client = make_client(chain)

    response = client.get(PATH.format(VALIDATOR))

    assert response.status_code == 200
    rates = response.json()["validator"]["commission"]["commission_rates"]
    assert rates == {"rate": None, "max_rate": None, "max_change_rate": None}
    assert response.json()["validator"]["description"]["moniker"] == "validator#0001"


def test_precise_stake(chain, make_client):
    chain.stake = Decimal("12345.123456789012345678")
    client = make_client(chain)

    response = client.get(PATH.format(VALIDATOR))

    assert response.json()["validator"]["tokens"] == "12345.123456789012345678"


def test_malformed_address_is_client_error(chain, make_client):
    client = make_client(chain)

    response = client.get(PATH.format("not-an-address"))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid address"
    assert chain.calls == []

    response = client.get(PATH.format(VALIDATOR))
    assert response.status_code == 200


def test_wrong_network_prefix_is_client_error(chain, make_client):
    client = make_client(chain, address_hrp="atest")

    response = client.get(PATH.format(VALIDATOR))

    assert response.status_code == 400
    assert "prefix" in response.json()["detail"]


def test_upstream_failures_are_server_errors(chain, make_client):
    client = make_client(chain)

    for query in ("epoch", "metadata", "state", "stake"):
        chain.failures = {query: UpstreamError(f"{query} unavailable")}

        response = client.get(PATH.format(VALIDATOR))

        assert response.status_code == 502
        assert response.json()["error"] == "Upstream error"
        assert f"{query} unavailable" in response.json()["detail"]

    chain.failures = {}
    assert client.get(PATH.format(VALIDATOR)).status_code == 200


def test_upstream_decode_failure_is_server_error(chain, make_client):
    chain.failures = {"state": UpstreamDecodeError("Unknown validator state tag 9")}
    client = make_client(chain)

    response = client.get(PATH.format(VALIDATOR))

    assert response.status_code == 502


def test_upstream_timeout_is_gateway_timeout(chain, make_client):
    chain.failures = {"epoch": UpstreamTimeoutError("Timed out querying /shell/epoch")}
    client = make_client(chain)

    response = client.get(PATH.format(VALIDATOR))

    assert response.status_code == 504
    assert response.json()["error"] == "Upstream timeout"


def test_cors_headers(chain, make_client):
    client = make_client(chain)

    response = client.get(PATH.format(VALIDATOR), headers={"Origin": "http://localhost:1317"})

    assert response.headers["access-control-allow-origin"] == "http://localhost:1317"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_cors_preflight(chain, make_client):
    client = make_client(chain)

    response = client.options(
        PATH.format(VALIDATOR),
        headers={
            "Origin": "http://localhost:1317",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "Authorization",
        },
    )

    assert response.status_code == 200
    assert "GET" in response.headers["access-control-allow-methods"]


def test_health(chain, make_client):
    client = make_client(chain)

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": "1.0.0"}


def test_shutdown_closes_chain_client(chain, make_client):
    with make_client(chain) as client:
        client.get("/health")

    assert chain.closed
