import threading

import pytest

from ptkit.errors import ErrorCode, PtkError, error_string, last_error, set_last_error


def test_known_descriptions():
    assert error_string(ErrorCode.OK) == "Success"
    assert error_string(ErrorCode.TIMEOUT) == "Operation timed out"
    assert error_string(ErrorCode.UNSUPPORTED) == "Operation not supported"


def test_every_code_has_a_description():
    descriptions = [error_string(code) for code in ErrorCode]
    assert "Unknown error" not in descriptions
    assert len(set(descriptions)) == len(list(ErrorCode))


def test_unknown_code():
    assert error_string(9999) == "Unknown error"
    assert error_string(-1) == "Unknown error"


def test_plain_int_accepted():
    assert error_string(int(ErrorCode.BUFFER_TOO_SMALL)) == "Buffer too small for operation"


def test_last_error_round_trip():
    set_last_error(ErrorCode.INVALID_PARAM)
    assert last_error() is ErrorCode.INVALID_PARAM
    set_last_error(ErrorCode.OK)
    assert last_error() is ErrorCode.OK


def test_last_error_is_per_thread():
    set_last_error(ErrorCode.ABORT)
    seen = []

    def worker():
        seen.append(last_error())
        set_last_error(ErrorCode.CLOSED)
        seen.append(last_error())

    t = threading.Thread(target=worker)
    t.start()
    t.join()
    assert seen == [ErrorCode.OK, ErrorCode.CLOSED]
    assert last_error() is ErrorCode.ABORT
    set_last_error(ErrorCode.OK)


def test_ptk_error_default_message():
    err = PtkError(ErrorCode.TIMEOUT)
    assert err.code is ErrorCode.TIMEOUT
    assert err.message == "Operation timed out"
    assert "TIMEOUT" in str(err)


def test_ptk_error_custom_message():
    err = PtkError(ErrorCode.PARSE_ERROR, "bad header")
    assert err.message == "bad header"
    assert err.code is ErrorCode.PARSE_ERROR


def test_ptk_error_rejects_unknown_code():
    with pytest.raises(ValueError):
        PtkError(9999)