from dataclasses import dataclass
from typing import TypeAlias

from mypy_extensions import mypyc_attr

from ..utils.io import CRLF, DEFAULT_ENCODING, asBytes
from ..utils.logging import debug, logged, warning

HTTP_VERSION: str = "HTTP/1.1"
# NOTE: The reason phrase is not derived from the status, all responses
# are sent as `OK`.
REASON_PHRASE: str = "OK"

THeader: TypeAlias = tuple[str, str]

# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class BuilderConsumed(RuntimeError):
	"""Raised when a `ResponseBuilder` is used after `build()` was called."""

	def __init__(self, operation: str):
		super().__init__(
			f"ResponseBuilder.{operation}() called on a builder that was already built"
		)
		self.operation: str = operation


# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


@mypyc_attr(native_class=False)
@dataclass(slots=True, frozen=True, repr=False)
class Response:
	"""A finalized HTTP response, as produced by `ResponseBuilder.build()`.

	Fields can't be reassigned, and the only thing a response does is
	serializing itself to the HTTP/1.1 wire format:

	```
	HTTP/1.1 <status> OK\\r\\n
	<name>: <value>\\r\\n … <name>: <value>
	\\r\\n\\r\\n
	<body>
	```
	"""

	status: int = 200
	headers: tuple[THeader, ...] = ()
	body: str = ""

	def serialize(self) -> str:
		"""Returns the response as an HTTP/1.1 message. Headers are joined
		with CRLF and followed by two CRLF before the body, so an empty header
		block produces three consecutive CRLF after the status line. No
		`Content-Length` is added."""
		headers: str = CRLF.join(f"{name}: {value}" for name, value in self.headers)
		return f"{HTTP_VERSION} {self.status} {REASON_PHRASE}{CRLF}{headers}{CRLF}{CRLF}{self.body}"

	def encode(self, encoding: str = DEFAULT_ENCODING) -> bytes:
		"""Returns the serialized response as bytes, ready to be written
		to a socket."""
		return asBytes(self.serialize(), encoding)

	def __str__(self) -> str:
		return self.serialize()

	def __repr__(self) -> str:
		return f"Response({HTTP_VERSION} {self.status} {REASON_PHRASE} headers={len(self.headers)} body={len(self.body)})"


# -----------------------------------------------------------------------------
#
# BUILDER
#
# -----------------------------------------------------------------------------


@mypyc_attr(allow_interpreted_subclasses=True)
class ResponseBuilder:
	"""Accumulates the status, headers and body of a response through
	chained calls, and produces a `Response` with `build()`.

	```
	ResponseBuilder()
		.status(200)
		.header("Content-Type", "text/plain")
		.body("Hello, World!")
		.build()
	```

	Nothing is validated: any status code is accepted, headers are appended
	as given (duplicates included) and the last `body()` wins. A builder
	can only be built once, any later call raises `BuilderConsumed`.
	"""

	__slots__ = ["_status", "_headers", "_body", "_consumed"]

	@staticmethod
	def New() -> "ResponseBuilder":
		return ResponseBuilder()

	def __init__(self) -> None:
		self._status: int = 200
		self._headers: list[THeader] = []
		self._body: str = ""
		self._consumed: bool = False

	@property
	def isConsumed(self) -> bool:
		return self._consumed

	def _ensureAvailable(self, operation: str) -> None:
		if self._consumed:
			warning("Builder reused after build", Operation=operation)
			raise BuilderConsumed(operation)

	def status(self, code: int) -> "ResponseBuilder":
		"""Sets the status code, without any range check."""
		self._ensureAvailable("status")
		self._status = code
		return self

	def header(self, name: str, value: str) -> "ResponseBuilder":
		"""Appends the given header, even if one with the same name exists."""
		self._ensureAvailable("header")
		self._headers.append((name, value))
		return self

	def body(self, text: str) -> "ResponseBuilder":
		"""Replaces the body."""
		self._ensureAvailable("body")
		self._body = text
		return self

	def build(self) -> Response:
		"""Consumes the builder and returns the corresponding `Response`."""
		self._ensureAvailable("build")
		self._consumed = True
		headers: tuple[THeader, ...] = tuple(self._headers)
		self._headers = []
		logged(debug) and debug(
			"Response built",
			Status=self._status,
			Headers=len(headers),
			Body=len(self._body),
		)
		return Response(status=self._status, headers=headers, body=self._body)

	def __repr__(self) -> str:
		return f"ResponseBuilder(status={self._status} headers={len(self._headers)} body={len(self._body)}{' consumed' if self._consumed else ''})"


# EOF
