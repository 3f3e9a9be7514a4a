import pytest

from casador import host_adapter
from casador.config import AppConfig
from casador.host_adapter import (
    STATUS_ERROR,
    STATUS_INVALID_CALL,
    STATUS_MALFORMED,
    STATUS_OK,
    find_all_matches,
    find_matches,
    ping,
)

TEXT = "the quick hello brown fox jumps"


@pytest.fixture(autouse=True)
def _default_config():
    host_adapter.set_config(AppConfig())
    yield
    host_adapter.set_config(None)


def test_ping() -> None:
    assert ping() == (STATUS_OK, "Success")


def test_single_span_ok_and_error() -> None:
    assert find_matches(10, 5, TEXT) == (STATUS_OK, "hello")
    assert find_matches(0, 3, TEXT) == (STATUS_OK, "the")
    assert find_matches(11, 4, TEXT) == (STATUS_ERROR, "")
    assert find_matches(30, 5, TEXT) == (STATUS_ERROR, "")


def test_single_span_accepts_utf8_bytes() -> None:
    text = "café olá mundo".encode("utf-8")
    assert find_matches(5, 3, text) == (STATUS_OK, "olá")


def test_single_span_undecodable_is_malformed() -> None:
    status, reason = find_matches(-1, 3, TEXT)
    assert status == STATUS_MALFORMED
    assert "start_pos" in reason

    status, _ = find_matches(1, 3, b"\xff\xfe")
    assert status == STATUS_MALFORMED


def test_batch_uses_configured_policy() -> None:
    assert find_all_matches([(10, 5), (22, 3), (11, 4)], TEXT) == (STATUS_OK, ["hello", "fox", ""])

    host_adapter.set_config(AppConfig(batch_policy="filtered"))
    assert find_all_matches([(10, 5), (22, 3), (11, 4)], TEXT) == (STATUS_OK, ["hello", "fox"])


def test_batch_explicit_policy_overrides_config() -> None:
    response = find_all_matches([(10, 5), (11, 4)], TEXT, policy="filtered")
    assert response.status == STATUS_OK
    assert response.result == ["hello"]


def test_batch_with_malformed_candidate_returns_no_partial_results() -> None:
    response = find_all_matches([(10, 5), ("a", "b")], TEXT)
    assert response.status == STATUS_MALFORMED
    assert isinstance(response.result, str)
    assert "#1" in response.result


def test_batch_rejects_non_text() -> None:
    response = find_all_matches([(0, 1)], 123)
    assert response.status == STATUS_MALFORMED


def test_batch_unknown_policy_returns_invalid_call() -> None:
    response = find_all_matches([(10, 5)], TEXT, policy="partial")
    assert response.status == STATUS_INVALID_CALL
    assert "partial" in response.result


@pytest.mark.parametrize("workers", ["4", 0, -2, 2.5, True])
def test_batch_bad_parallel_workers_returns_invalid_call(workers) -> None:
    response = find_all_matches([(10, 5)], TEXT, parallel_workers=workers)
    assert response.status == STATUS_INVALID_CALL
    assert "parallel_workers" in response.result


def test_set_config_none_reloads_from_working_dir(tmp_path, monkeypatch) -> None:
    (tmp_path / "casador.yaml").write_text("batch_policy: filtered\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    host_adapter.set_config(None)

    assert find_all_matches([(10, 5), (11, 4)], TEXT) == (STATUS_OK, ["hello"])
