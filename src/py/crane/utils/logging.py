import sys
import time
from enum import Enum
from typing import NamedTuple, Any, Callable, TypeAlias
from contextvars import ContextVar
from ..config import LOG_LEVEL as CONFIG_LOG_LEVEL
from .term import Term

ERR = sys.stderr

TPrimitive: TypeAlias = bool | int | float | str | bytes | None

LogOrigin: ContextVar[str] = ContextVar("LogOrigin", default="crane")


class LogLevel(Enum):
	Debug = 0
	Info = 10
	Warning = 30
	Exception = 50  # An un-managed error

	@staticmethod
	def FromName(name: str, default: "LogLevel") -> "LogLevel":
		for level in LogLevel:
			if level.name.lower() == name.strip().lower():
				return level
		return default


LOG_LEVEL_COLOR = {
	LogLevel.Debug: 31,
	LogLevel.Info: 75,
	LogLevel.Warning: 202,
	LogLevel.Exception: 124,
}

# Entries below this level are dropped
LOG_LEVEL: LogLevel = LogLevel.FromName(CONFIG_LOG_LEVEL, LogLevel.Info)


class LogEntry(NamedTuple):
	origin: str
	time: float
	level: LogLevel = LogLevel.Info
	message: str | None = None
	context: dict[str, TPrimitive] | None = None


def formatData(value: Any) -> str:
	if value is None or value == () or value == [] or value == {}:
		return "◌"
	elif isinstance(value, dict):
		return " ".join(
			f"{Term.BOLD}{k}{Term.RESET}={formatData(v)}" for k, v in value.items()
		)
	elif isinstance(value, str):
		return repr(value) if " " in value else value
	elif isinstance(value, bool):
		return "✓" if value else "✗"
	elif isinstance(value, float):
		return f"{value:0.2f}"
	else:
		return str(value)


def send(entry: LogEntry) -> LogEntry:
	if entry.level.value < LOG_LEVEL.value:
		return entry
	clr: str = Term.Color(LOG_LEVEL_COLOR[LogLevel(entry.level.value)])
	ERR.write(
		f"{clr}{Term.BOLD}[{entry.origin}]{Term.RESET} {entry.message} {formatData(entry.context)}{Term.RESET}\n"
	)
	ERR.flush()
	return entry


def entry(
	*,
	origin: str | None = None,
	at: float | None = None,
	level: LogLevel = LogLevel.Info,
	message: str | None = None,
	context: dict[str, TPrimitive],
) -> LogEntry:
	return LogEntry(
		origin=origin or LogOrigin.get(),
		time=time.time() if at is None else at,
		level=level,
		message=message,
		context=context,
	)


def debug(
	message: str,
	*,
	origin: str | None = None,
	at: float | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			level=LogLevel.Debug,
			origin=origin,
			at=at,
			context=context,
		)
	)


def info(
	message: str,
	*,
	origin: str | None = None,
	at: float | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			origin=origin,
			at=at,
			context=context,
		)
	)


def warning(
	message: str,
	*,
	origin: str | None = None,
	at: float | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			level=LogLevel.Warning,
			origin=origin,
			at=at,
			context=context,
		)
	)


def exception(
	exception: Exception,
	message: str | None = None,
) -> Exception:
	"""Writes the exception and its traceback to stderr, and returns it so
	that it can be used as `raise exception(e)`."""
	try:
		ERR.write(
			f"!!! EXCP {f'{message}: ' if message else ''}[{exception.__class__.__name__}] {exception}\n"
		)
		tb = exception.__traceback__
		while tb:
			code = tb.tb_frame.f_code
			ERR.write(
				f"... in {code.co_name:15s} at {tb.tb_lineno:4d} in {code.co_filename}\n",
			)
			tb = tb.tb_next
		ERR.flush()
	except Exception:  # nosec: B110
		# Swallow all exceptions so that this function can be called from an
		# exception handler safely, such as when stderr is gone.
		pass
	return exception


# Keyed by name so that the mapping survives a reload of this module
LOGGING_LEVEL: dict[str, int] = {
	"debug": LogLevel.Debug.value,
	"info": LogLevel.Info.value,
	"warning": LogLevel.Warning.value,
	"exception": LogLevel.Exception.value,
}


def logged(item: Callable[..., Any]) -> bool:
	"""Takes one of the logging function, and tells if it is currently
	enabled. This is used to guard against running the whole entry
	building when not necessary, as in `logged(debug) and debug(…)`."""
	return (
		LOGGING_LEVEL.get(getattr(item, "__name__", ""), LogLevel.Info.value)
		>= LOG_LEVEL.value
	)


# EOF
