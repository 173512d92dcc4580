"""Общая часть доменных сервисов: загрузка, проверка ссылок, сохранение.

Каждая операция — одна единица работы в сессии SQLAlchemy. При любой ошибке
сохранения сессия откатывается, частичных изменений не остаётся.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from rekvalifikace.errors import (
    ConflictError,
    IntegrityConflictError,
    NotFoundError,
    ReferenceNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class EntityService:
    model: Any = None
    entity_name = "Запись"

    def __init__(self, db: Session) -> None:
        self.db = db

    def exists(self, entity_id: int) -> bool:
        return (
            self.db.query(self.model.id).filter(self.model.id == entity_id).first()
            is not None
        )

    def delete(self, entity_id: int) -> None:
        entity = self._get_entity(entity_id)
        self.db.delete(entity)
        self._commit(entity_id)
        logger.info("%s %s удалён", self.entity_name, entity_id)

    # ------------------------------------------------------------------

    def _find(self, entity_id: int, *options):
        query = self.db.query(self.model)
        if options:
            query = query.options(*options)
        return query.filter(self.model.id == entity_id).first()

    def _get_entity(self, entity_id: int, *options):
        entity = self._find(entity_id, *options)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    def _resolve(self, model, entity_name: str, entity_id: Optional[int]):
        """Разрешает внешний идентификатор в живую сущность."""
        reference = self.db.get(model, entity_id) if entity_id is not None else None
        if reference is None:
            # уже переназначенные ссылки этой операции не должны попасть в БД
            self.db.rollback()
            logger.warning("%s с ID %s не найден", entity_name, entity_id)
            raise ReferenceNotFoundError(entity_name, entity_id)
        return reference

    def _check_version(self, entity, version: Optional[int]) -> None:
        if version is not None and version != entity.version:
            logger.warning(
                "%s %s: версия %s устарела (в БД %s)",
                self.entity_name, entity.id, version, entity.version,
            )
            raise ConflictError(self.entity_name, entity.id)

    @staticmethod
    def _apply(entity, changes: dict) -> None:
        for field, value in changes.items():
            setattr(entity, field, value)

    @staticmethod
    def _require_text(value: Optional[str], label: str) -> None:
        if value is None or not value.strip():
            raise ValidationError(f"Поле «{label}» обязательно")

    def _commit(self, entity_id: Optional[int] = None) -> None:
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            # строку удалили между загрузкой и сохранением — это не конфликт
            if entity_id is not None and not self.exists(entity_id):
                raise NotFoundError(self.entity_name, entity_id)
            logger.warning("%s %s: параллельное изменение", self.entity_name, entity_id)
            raise ConflictError(self.entity_name, entity_id)
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("%s %s: нарушение целостности: %s", self.entity_name, entity_id, exc.orig)
            raise IntegrityConflictError(
                f"{self.entity_name} с ID {entity_id} нельзя сохранить или удалить: "
                "на запись ссылаются другие данные"
            ) from exc
