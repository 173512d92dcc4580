import logging
from typing import List, Optional

from sqlalchemy.orm import selectinload

from rekvalifikace.errors import ValidationError
from rekvalifikace.models.user import Role, User
from rekvalifikace.schemas.user import UserCreate, UserOut, UserUpdate
from rekvalifikace.services.base import EntityService
from rekvalifikace.utils import mapping
from rekvalifikace.utils.auth import get_password_hash, verify_password
from rekvalifikace.utils.policy import SUPER_ADMIN_ROLE

logger = logging.getLogger(__name__)


class UserService(EntityService):
    model = User
    entity_name = "Пользователь"

    def create(self, payload: UserCreate) -> int:
        self._require_text(payload.username, "Имя пользователя")
        self._require_text(payload.password, "Пароль")
        username = payload.username.strip()
        self._ensure_username_free(username)

        user = User(
            username=username,
            email=str(payload.email),
            password_hash=get_password_hash(payload.password),
        )
        self.db.add(user)
        self._commit()
        logger.info("Пользователь %s создан", user.id)
        return user.id

    def list(self) -> List[UserOut]:
        users = self.db.query(User).options(selectinload(User.roles)).order_by(User.username).all()
        return [mapping.user_to_out(u) for u in users]

    def get_by_id(self, user_id: int) -> Optional[UserOut]:
        user = self.db.get(User, user_id)
        return mapping.user_to_out(user) if user else None

    def update(self, user_id: int, payload: UserUpdate) -> None:
        self._require_text(payload.username, "Имя пользователя")
        user = self._get_entity(user_id)

        username = payload.username.strip()
        if username != user.username:
            self._ensure_username_free(username)

        user.username = username
        user.email = str(payload.email)
        if payload.password:
            user.password_hash = get_password_hash(payload.password)
        self._commit(user_id)
        logger.info("Пользователь %s обновлён", user_id)

    def authenticate(self, username: str, password: str) -> Optional[User]:
        user = self.db.query(User).filter(User.username == username).first()
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    def _ensure_username_free(self, username: str) -> None:
        if self.db.query(User.id).filter(User.username == username).first():
            raise ValidationError(f"Имя пользователя {username} уже занято")


def ensure_superadmin(db, username: str, email: str, password: str) -> int:
    """Создаёт (или находит) пользователя и включает его в роль SuperAdmin."""
    service = UserService(db)
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        user = db.get(User, service.create(UserCreate(username=username, email=email, password=password)))
        logger.info("Создан начальный SuperAdmin %s", username)

    role = db.query(Role).filter(Role.name == SUPER_ADMIN_ROLE).first()
    if role is not None and role not in user.roles:
        user.roles.append(role)
        db.commit()
    return user.id
