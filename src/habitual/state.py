# SPDX-License-Identifier: MIT

from contextvars import ContextVar

_clear_ids: ContextVar[bool] = ContextVar("clear_ids", default=True)
_timezone: ContextVar[str] = ContextVar("timezone", default="local")


def set_clear_ids(value: bool) -> None:
    _clear_ids.set(value)


def get_clear_ids() -> bool:
    return _clear_ids.get()


def set_timezone(value: str) -> None:
    _timezone.set(value)


def get_timezone() -> str:
    """Timezone used to turn instants into habit calendar dates."""
    return _timezone.get()
