import os
import sys
import inspect
import datetime
from pathlib import Path
from typing import TypedDict, Literal

LoggerSeverity = Literal["debug", "info", "warn", "error"]


class CallSite(TypedDict):
    function: str
    file: str
    line: str


LOG_FILE_PATH = Path(__file__).resolve().parents[1] / "logs" / "prereqs.log"

LEVELS = {
    "debug": 0,
    "info": 1,
    "warn": 2,
    "error": 3,
}

COLORS = {
    "debug": "\033[94m",
    "warn": "\033[33m",
    "error": "\033[31m",
    "reset": "\033[0m",
}


def get_timestamp() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.strftime("%Y-%m-%d-%H:%M:%S.%f")[:-3]


def get_call_site(depth: int = 4) -> CallSite:
    # 0 = get_call_site, 1 = format_message, 2 = _log, 3 = Logger method, 4 = caller
    stack = inspect.stack()
    if len(stack) <= depth:
        return {"function": "<unknown>", "file": "<unknown>", "line": "<unknown>"}

    frame = stack[depth]
    return {
        "function": frame.function or "<anonymous>",
        "file": os.path.basename(frame.filename or "<unknown>"),
        "line": str(frame.lineno) if frame.lineno else "<unknown>",
    }


def should_log(level: LoggerSeverity) -> bool:
    threshold = os.getenv("LOG_LEVEL", "info").lower()
    return LEVELS.get(level, 0) >= LEVELS.get(threshold, 0)


def format_message(level: LoggerSeverity, message: str) -> str:
    timestamp = get_timestamp()
    if os.getenv("LOG_VERBOSITY", "detailed").lower() == "detailed":
        site = get_call_site()
        return (
            f"[{timestamp}] {level.upper()} "
            f"[{site['function']}@{site['file']}:{site['line']}]: {message}"
        )
    return f"[{timestamp}] {level.upper()}: {message}"


def _log(level: LoggerSeverity, message: str) -> None:
    env = os.getenv("ENV", "development").lower()
    if env == "test" or not should_log(level):
        return

    log_message = format_message(level, message)

    if env == "development":
        if level in COLORS:
            print(COLORS[level] + log_message + COLORS["reset"], file=sys.stderr)
        else:
            print(log_message, file=sys.stderr)
        return

    try:
        LOG_FILE_PATH.parent.mkdir(parents=True, exist_ok=True)
        with open(LOG_FILE_PATH, "a", encoding="utf-8") as f:
            f.write(log_message + "\n")
    except OSError as err:
        print(f"Failed to write log to file: {err}", file=sys.stderr)
        print(log_message, file=sys.stderr)


class Logger:
    @staticmethod
    def debug(message: str) -> None:
        _log("debug", message)

    @staticmethod
    def info(message: str) -> None:
        _log("info", message)

    @staticmethod
    def warn(message: str) -> None:
        _log("warn", message)

    @staticmethod
    def error(message: str) -> None:
        _log("error", message)


logger = Logger()
