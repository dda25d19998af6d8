"""Jinja2 environment for map pages."""

from __future__ import annotations

from functools import lru_cache

from jinja2 import Environment, PackageLoader, select_autoescape


@lru_cache(maxsize=1)
def environment() -> Environment:
    return Environment(
        loader=PackageLoader("swapmap", "templates"),
        autoescape=select_autoescape(["html"]),
    )
