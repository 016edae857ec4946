"""Shared helpers for routers."""

import re

from fastapi import HTTPException

from bioreel_core.config import limit_param, min_rating_param
from bioreel_core.errors import DomainError

# Leading numeric prefix, so "5abc" reads as 5 and "1e3" as 1 for ints.
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def clamp_int(value: str | None, lo: int, hi: int, fallback: int) -> int:
    m = _INT_PREFIX.match(value or "")
    if m is None:
        return fallback
    return max(lo, min(hi, int(m.group(1))))


def clamp_float(value: str | None, lo: float, hi: float, fallback: float) -> float:
    m = _FLOAT_PREFIX.match(value or "")
    if m is None:
        return fallback
    return max(lo, min(hi, float(m.group(1))))


def parse_limit(value: str | None) -> int:
    return clamp_int(value, limit_param["min"], limit_param["max"], limit_param["default"])


def parse_min_rating(value: str | None) -> float:
    return clamp_float(
        value, min_rating_param["min"], min_rating_param["max"], min_rating_param["default"]
    )


def to_http(exc: DomainError) -> HTTPException:
    return HTTPException(status_code=exc.status, detail=str(exc))
