from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from passlib.context import CryptContext

from rekvalifikace.database import get_db
from rekvalifikace.models.user import User
from rekvalifikace.utils import policy

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/token")

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)

def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    # упрощённая схема: токен = id пользователя
    try:
        user = db.get(User, int(token))
    except ValueError:
        user = None
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return user

def get_caller_roles(user: User = Depends(get_current_user)) -> set[str]:
    return user.role_names

def require_privilege(minimum: policy.Privilege):
    """Зависимость FastAPI: пропускает пользователей с уровнем не ниже minimum."""
    def dependency(user: User = Depends(get_current_user)) -> User:
        policy.require(user.role_names, minimum)
        return user
    return dependency
