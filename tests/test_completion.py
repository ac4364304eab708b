from apiclient.completion import is_stream_complete


def test_transport_done_always_wins() -> None:
    assert is_stream_complete(True, None)
    assert is_stream_complete(True, b"partial content")


def test_empty_payload_is_not_complete() -> None:
    assert not is_stream_complete(False, None)
    assert not is_stream_complete(False, b"")


def test_sse_done_sentinel() -> None:
    assert is_stream_complete(False, b'data: {"text": "hi"}\n\ndata: [DONE]\n\n')


def test_json_done_flag_on_its_own_line() -> None:
    assert is_stream_complete(False, b'{"response": "a", "done": false}\n{"done": true}\n')
    assert is_stream_complete(False, b'{"model":"m","done":true}')


def test_done_marker_that_is_not_a_boolean_true_object() -> None:
    assert not is_stream_complete(False, b'{"text": "x", "meta": {"done": true}}\n')
    assert not is_stream_complete(False, b'"done": true, but not json')
    assert not is_stream_complete(False, b'[{"done": true}]')


def test_ordinary_content_is_not_complete() -> None:
    assert not is_stream_complete(False, b"Hello, world!")


def test_invalid_utf8_never_raises() -> None:
    assert not is_stream_complete(False, b"\xff\xfe\xfa")
