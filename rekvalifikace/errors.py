"""Типизированные ошибки доменного слоя.

Сервисы поднимают их, роутеры переводят в HTTP-ответы.
"""


class RosterError(Exception):
    """Базовая ошибка; всегда относится к одной операции."""


class ReferenceNotFoundError(RosterError):
    """Внешний идентификатор не разрешился в существующую запись."""

    def __init__(self, entity: str, entity_id) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} с ID {entity_id} не найден")


class NotFoundError(RosterError):
    def __init__(self, entity: str, entity_id) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} с ID {entity_id} не найден")


class ConflictError(RosterError):
    """Запись изменена другим пользователем после загрузки; можно повторить."""

    def __init__(self, entity: str, entity_id) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} с ID {entity_id} был изменён параллельно. Повторите действие."
        )


class IntegrityConflictError(RosterError):
    """Хранилище отклонило запись из-за зависимых строк или ограничений."""


class UnauthorizedError(RosterError):
    pass


class ValidationError(RosterError):
    pass
