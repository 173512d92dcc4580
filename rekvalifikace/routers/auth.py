from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from rekvalifikace.database import get_db
from rekvalifikace.models.user import User
from rekvalifikace.services.users import UserService
from rekvalifikace.utils import mapping
from rekvalifikace.utils.auth import get_current_user

router = APIRouter(tags=["auth"])


@router.get("/me")
def get_profile(user: User = Depends(get_current_user)):
    """
    Профиль текущего пользователя вместе с его ролями.
    """
    return mapping.user_to_out(user)


@router.post("/token")
def login(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """
    Упрощённая авторизация: токен = id пользователя.
    """
    user = UserService(db).authenticate(form.username, form.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Неверный логин или пароль")

    return {"access_token": str(user.id), "token_type": "bearer"}
