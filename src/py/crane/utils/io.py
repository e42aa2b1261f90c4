DEFAULT_ENCODING: str = "utf8"
CRLF: str = "\r\n"


def asBytes(value: str | bytes | None, encoding: str = DEFAULT_ENCODING) -> bytes:
	if isinstance(value, bytes):
		return value
	elif isinstance(value, str):
		return bytes(value, encoding)
	elif value is None:
		return b""
	else:
		raise ValueError(f"Expected bytes or str, got: {value}")


# EOF
