"""
User — запись зарегистрированного участника

Immutable Pydantic модель. Создаётся один раз на principal при регистрации,
никогда не удаляется. Смена роли создаёт новый экземпляр.
"""

from typing import Annotated

from pydantic import BaseModel, Field

from .role import Role


# Непрозрачный идентификатор вызывающего (проверяется внешней стороной)
Principal = Annotated[str, Field(min_length=1)]


class User(BaseModel):
    """
    Модель участника.

    Счётчики репутации стартуют с нуля и в текущем ядре не изменяются
    (выставление оценок не реализовано).
    """

    principal: Principal = Field(..., description="Идентификатор участника")
    role: Role = Field(..., description="Текущая роль")
    reputation_as_buyer: int = Field(
        default=0, ge=0, description="Накопленная репутация как покупателя"
    )
    reputation_as_seller: int = Field(
        default=0, ge=0, description="Накопленная репутация как продавца"
    )

    model_config = {"frozen": True}

    def with_role(self, role: Role) -> "User":
        """Новый экземпляр с изменённой ролью."""
        return self.model_copy(update={"role": role})
