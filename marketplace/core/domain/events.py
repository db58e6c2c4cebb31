"""
Доменные события

События именуются в прошедшем времени и неизменяемы.
В текущем ядре публикуется только RoleChanged.
"""

from pydantic import BaseModel, Field

from .role import Role
from .user import Principal


class RoleChanged(BaseModel):
    """Участник сменил роль."""

    principal: Principal = Field(..., description="Участник")
    previous_role: Role = Field(..., description="Роль до смены")
    new_role: Role = Field(..., description="Роль после смены")

    model_config = {"frozen": True}
