"""Error codes returned by the scheduling API."""

from enum import Enum


class ErrorCode(Enum):
    SUCCESS = "SUCCESS"
    ERR_INVALID_INPUT = "ERR_INVALID_INPUT"
    ERR_EMPTY_TASKS = "ERR_EMPTY_TASKS"
    ERR_INVALID_LIMITS = "ERR_INVALID_LIMITS"
