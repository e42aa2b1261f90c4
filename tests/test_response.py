import dataclasses
import threading

import pytest

from crane import HTTP_VERSION, REASON_PHRASE, Response, ResponseBuilder

# --
# Serialization of built responses, compared byte for byte.


def test_hello_world():
	res = (
		ResponseBuilder.New()
		.status(200)
		.header("Content-Type", "text/plain")
		.body("Hello, World!")
		.build()
	)
	assert (
		res.serialize()
		== "HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n\r\nHello, World!"
	)


def test_headers_end_with_a_single_blank_line():
	assert str(ResponseBuilder().header("k", "v").build()) == "HTTP/1.1 200 OK\r\nk: v\r\n\r\n"


def test_not_found_without_headers():
	assert ResponseBuilder().status(404).build().serialize() == "HTTP/1.1 404 OK\r\n\r\n\r\n"


def test_default():
	res = ResponseBuilder().build()
	assert res.status == 200
	assert res.headers == ()
	assert res.body == ""
	assert res.serialize() == "HTTP/1.1 200 OK\r\n\r\n\r\n"


@pytest.mark.parametrize("status", [0, 100, 201, 301, 404, 500, 599, 999, 9999])
def test_status_line_is_always_ok(status):
	text = ResponseBuilder().status(status).body("payload").build().serialize()
	assert text.startswith(f"HTTP/1.1 {status} OK\r\n")
	assert text.endswith("payload")
	assert not text.endswith("payload\r\n")


def test_unchecked_status():
	assert ResponseBuilder().status(9999).build().serialize().split("\r\n")[0] == (
		"HTTP/1.1 9999 OK"
	)


def test_header_order_and_duplicates():
	res = (
		ResponseBuilder()
		.header("Set-Cookie", "a=1")
		.header("X-Trace", "abc")
		.header("Set-Cookie", "b=2")
		.body("<p>ok</p>")
		.build()
	)
	assert res.serialize() == (
		"HTTP/1.1 200 OK\r\n"
		"Set-Cookie: a=1\r\n"
		"X-Trace: abc\r\n"
		"Set-Cookie: b=2\r\n"
		"\r\n"
		"<p>ok</p>"
	)


def test_headers_are_not_normalized():
	res = ResponseBuilder().header("content-type ", " text/html").header("", "").build()
	assert res.serialize() == "HTTP/1.1 200 OK\r\ncontent-type :  text/html\r\n: \r\n\r\n"


def test_no_content_length_added():
	text = ResponseBuilder().body("Hello").build().serialize()
	assert "Content-Length" not in text


def test_body_is_verbatim():
	body = "line 1\r\nline 2\n\r\n"
	text = ResponseBuilder().body(body).build().serialize()
	assert text == f"HTTP/1.1 200 OK\r\n\r\n\r\n{body}"


def test_idempotent():
	res = ResponseBuilder().status(302).header("Location", "/").body("moved").build()
	assert res.serialize() == res.serialize()
	assert str(res) == res.serialize()
	assert res.encode() == res.encode()


def test_encode():
	res = ResponseBuilder().header("Content-Type", "text/plain; charset=utf-8").body("héllo ✓").build()
	assert res.encode() == res.serialize().encode("utf8")
	assert res.encode().endswith("héllo ✓".encode("utf8"))
	assert ResponseBuilder().body("abc").build().encode("latin-1") == (
		b"HTTP/1.1 200 OK\r\n\r\n\r\nabc"
	)


def test_immutable():
	res = ResponseBuilder().status(201).build()
	with pytest.raises(dataclasses.FrozenInstanceError):
		res.status = 500  # type: ignore[misc]
	with pytest.raises(AttributeError):
		res.body = "changed"  # type: ignore[misc]
	assert isinstance(res.headers, tuple)


def test_equality_and_hash():
	a = ResponseBuilder().status(204).header("A", "1").build()
	b = ResponseBuilder().status(204).header("A", "1").build()
	assert a == b
	assert hash(a) == hash(b)
	assert a != ResponseBuilder().status(204).build()


def test_repr_is_not_the_wire_format():
	res = ResponseBuilder().status(404).header("A", "1").body("Hello, World!").build()
	assert repr(res) == "Response(HTTP/1.1 404 OK headers=1 body=13)"


def test_constants():
	assert HTTP_VERSION == "HTTP/1.1"
	assert REASON_PHRASE == "OK"


def test_direct_construction():
	res = Response(status=500, headers=(("A", "b"),), body="x")
	assert res.serialize() == "HTTP/1.1 500 OK\r\nA: b\r\n\r\nx"


def test_concurrent_serialization():
	res = ResponseBuilder().header("A", "1").body("x" * 1_000).build()
	expected = res.serialize()
	results: list[str] = []

	def worker():
		for _ in range(100):
			results.append(res.serialize())

	threads = [threading.Thread(target=worker) for _ in range(4)]
	for _ in threads:
		_.start()
	for _ in threads:
		_.join()
	assert len(results) == 400
	assert all(_ == expected for _ in results)


# EOF
