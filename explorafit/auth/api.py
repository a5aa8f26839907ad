# explorafit/auth/api.py
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from explorafit.shared.db import get_db
from explorafit.shared.auth import create_access_token, require_user_id
from explorafit.shared.errors import UserNotFound
from explorafit.shared.http import ok
from explorafit.auth.schemas import AuthOut, LoginIn, SignupIn
from explorafit.auth.service import authenticate_user, create_user, find_by_id

router = APIRouter(prefix="/auth", tags=["Auth"])

@router.post("/signup", response_model=AuthOut, status_code=201)
def api_signup(inb: SignupIn, db: Session = Depends(get_db)):
    user = create_user(db, inb.email, inb.password)
    return {"ok": True, "token": create_access_token(user.id), "user": user}

@router.post("/login", response_model=AuthOut)
def api_login(inb: LoginIn, db: Session = Depends(get_db)):
    user = authenticate_user(db, inb.email, inb.password)
    return {"ok": True, "token": create_access_token(user.id), "user": user}

@router.post("/token")
def api_token(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # OAuth2 password flow so Swagger's 'Authorize' button works
    user = authenticate_user(db, form.username, form.password)
    return {"access_token": create_access_token(user.id), "token_type": "bearer"}

@router.get("/me")
def api_me(user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    user = find_by_id(db, user_id)
    if not user:
        raise UserNotFound()
    return ok(user=user.public())
