"""Unit tests for endpoint rotation and the fallback loop."""

import pytest
from requests.exceptions import ConnectionError, HTTPError, Timeout
from unittest.mock import Mock

from sepolia_wallet.shared.errors import (
    AllEndpointsExhaustedError,
    NetworkError,
    NetworkErrorType,
)
from sepolia_wallet.shared.network import (
    EndpointPool,
    TimeoutConfig,
    classify_error,
    create_network_error,
    execute_with_fallback,
    is_network_or_rpc_error,
)
from web3.exceptions import Web3Exception


class TestTimeoutConfig:
    def test_default_values(self):
        config = TimeoutConfig()
        assert config.connect_timeout == 5.0
        assert config.read_timeout == 15.0

    def test_request_timeout_tuple(self):
        config = TimeoutConfig(connect_timeout=3.0, read_timeout=10.0)
        assert config.request_timeout == (3.0, 10.0)


@pytest.mark.unit
class TestEndpointPool:
    def test_empty_pool_is_rejected(self):
        with pytest.raises(ValueError):
            EndpointPool([])

    def test_starts_at_first_endpoint(self):
        pool = EndpointPool(["A", "B", "C"])
        assert pool.cursor == 0
        assert pool.current() == "A"

    def test_rotate_advances_and_returns_new_current(self):
        pool = EndpointPool(["A", "B", "C"])
        assert pool.rotate() == "B"
        assert pool.cursor == 1
        assert pool.current() == "B"

    def test_rotate_wraps_around(self):
        pool = EndpointPool(["A", "B", "C"], start_index=2)
        assert pool.rotate() == "A"
        assert pool.cursor == 0

    def test_full_cycle_returns_to_start(self):
        pool = EndpointPool(["A", "B", "C"], start_index=1)
        for _ in range(pool.size):
            pool.rotate()
        assert pool.cursor == 1

    def test_rotation_sequence_is_circular(self):
        pool = EndpointPool(["A", "B", "C"])
        seen = [pool.rotate() for _ in range(7)]
        assert seen == ["B", "C", "A", "B", "C", "A", "B"]

    def test_single_endpoint_rotates_onto_itself(self):
        pool = EndpointPool(["A"])
        assert pool.rotate() == "A"
        assert pool.cursor == 0

    def test_current_does_not_move_cursor(self):
        pool = EndpointPool(["A", "B"])
        pool.current()
        pool.current()
        assert pool.cursor == 0

    def test_endpoints_are_fixed(self):
        source = ["A", "B"]
        pool = EndpointPool(source)
        source.append("C")
        assert pool.endpoints == ("A", "B")
        assert pool.size == 2


class TestClassifyError:
    def test_classify_timeout(self):
        assert classify_error(Timeout("timed out")) == NetworkErrorType.TIMEOUT

    def test_classify_connection_error(self):
        assert classify_error(ConnectionError("refused")) == NetworkErrorType.CONNECTION_ERROR

    def test_classify_http_error(self):
        assert classify_error(HTTPError("500")) == NetworkErrorType.HTTP_ERROR

    def test_classify_rpc_errors(self):
        assert classify_error(Web3Exception("bad")) == NetworkErrorType.RPC_ERROR
        assert classify_error(ValueError({"code": -32000})) == NetworkErrorType.RPC_ERROR

    def test_classify_unknown(self):
        assert classify_error(RuntimeError("boom")) == NetworkErrorType.UNKNOWN

    def test_runtime_error_is_not_network_error(self):
        assert not is_network_or_rpc_error(RuntimeError("boom"))
        assert is_network_or_rpc_error(Timeout("slow"))


class TestCreateNetworkError:
    def test_wraps_timeout_with_endpoint(self):
        error = create_network_error(Timeout("slow"), "https://a", "Fetch balance")
        assert error.error_type == NetworkErrorType.TIMEOUT
        assert error.endpoint == "https://a"
        assert "Fetch balance" in error.message
        assert "https://a" in error.message

    def test_http_error_keeps_status(self):
        response = Mock(status_code=429, text="Too Many Requests")
        error = create_network_error(HTTPError(response=response), "https://a")
        assert error.status_code == 429
        assert "429" in error.message

    def test_network_error_passes_through(self):
        original = NetworkError(NetworkErrorType.TIMEOUT, "already wrapped")
        assert create_network_error(original, "https://a") is original


@pytest.mark.unit
class TestExecuteWithFallback:
    def test_first_endpoint_success_does_not_rotate(self):
        pool = EndpointPool(["A", "B", "C"])
        operation = Mock(return_value="ok")

        assert execute_with_fallback(pool, operation) == "ok"
        operation.assert_called_once_with("A")
        assert pool.cursor == 0

    def test_two_failures_then_success_on_third(self):
        pool = EndpointPool(["A", "B", "C"])
        calls = []

        def operation(endpoint):
            calls.append(endpoint)
            if endpoint in ("A", "B"):
                raise ConnectionError(f"{endpoint} down")
            return "from C"

        assert execute_with_fallback(pool, operation) == "from C"
        assert calls == ["A", "B", "C"]
        assert pool.cursor == 2

    def test_rotation_persists_across_calls(self):
        pool = EndpointPool(["A", "B", "C"])

        def fail_on_a(endpoint):
            if endpoint == "A":
                raise Timeout("slow")
            return endpoint

        assert execute_with_fallback(pool, fail_on_a) == "B"
        assert execute_with_fallback(pool, fail_on_a) == "B"
        assert pool.cursor == 1

    def test_all_fail_raises_after_exactly_one_pass(self):
        pool = EndpointPool(["A", "B", "C"], start_index=1)
        operation = Mock(side_effect=ConnectionError("down"))

        with pytest.raises(AllEndpointsExhaustedError) as exc_info:
            execute_with_fallback(pool, operation, context="Fetch balance")

        assert operation.call_count == 3
        assert [c.args[0] for c in operation.call_args_list] == ["B", "C", "A"]
        assert pool.cursor == 1
        assert exc_info.value.attempts == 3
        assert isinstance(exc_info.value.last_error, NetworkError)
        assert exc_info.value.last_error.endpoint == "A"
        assert "All 3 RPC endpoints failed" in str(exc_info.value)

    def test_non_network_error_propagates_without_rotation(self):
        pool = EndpointPool(["A", "B"])
        operation = Mock(side_effect=RuntimeError("bug"))

        with pytest.raises(RuntimeError):
            execute_with_fallback(pool, operation)

        operation.assert_called_once_with("A")
        assert pool.cursor == 0

    def test_attempt_callback_receives_each_failure(self):
        pool = EndpointPool(["A", "B", "C"])
        failures = []

        def operation(endpoint):
            if endpoint != "C":
                raise Web3Exception("rpc said no")
            return endpoint

        execute_with_fallback(
            pool,
            operation,
            on_attempt_failed=lambda attempt, endpoint, error: failures.append(
                (attempt, endpoint, error.error_type)
            ),
        )

        assert failures == [
            (1, "A", NetworkErrorType.RPC_ERROR),
            (2, "B", NetworkErrorType.RPC_ERROR),
        ]
