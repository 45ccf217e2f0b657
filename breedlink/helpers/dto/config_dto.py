"""
Configuration DTOs.

Typed views over the composed config dict, built by ConfigService.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ArangoConfig:
    """Connection settings for ArangoDB."""

    hosts: str
    username: str
    password: str
    db_name: str


@dataclass(frozen=True)
class EngineConfig:
    """Settings consumed by the domain services."""

    default_page_size: int
    activity_log_view_limit: int
    dashboard_recent_count: int
    max_page_size: int
