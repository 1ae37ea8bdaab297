"""健康检查结果与整体状态判定。"""

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class ComponentStatus(str, Enum):
    UP = "up"
    DOWN = "down"


class OverallStatus(str, Enum):
    """Value reported by /health."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class DatabaseHealth(BaseModel):
    """PostgreSQL 连接与目录表迁移情况。"""

    status: ComponentStatus
    version: str | None = None
    missing_tables: list[str] = Field(default_factory=list, description="尚未迁移的表")
    error: str | None = None

    @computed_field
    @property
    def catalog_ready(self) -> bool:
        return self.status == ComponentStatus.UP and not self.missing_tables


def overall_status(database: DatabaseHealth) -> OverallStatus:
    """数据库不可用为 unhealthy；可连接但目录表缺失为 degraded。"""
    if database.status == ComponentStatus.DOWN:
        return OverallStatus.UNHEALTHY
    if not database.catalog_ready:
        return OverallStatus.DEGRADED
    return OverallStatus.HEALTHY
