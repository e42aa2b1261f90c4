from .http.response import (
	BuilderConsumed,
	HTTP_VERSION,
	REASON_PHRASE,
	Response,
	ResponseBuilder,
)  # NOQA: F401

__all__ = [
	"BuilderConsumed",
	"HTTP_VERSION",
	"REASON_PHRASE",
	"Response",
	"ResponseBuilder",
]

# EOF
