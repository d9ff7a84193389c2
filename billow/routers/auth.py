"""
Account session endpoints.

POST /register  — create an account
POST /login     — bind the account to the session cookie
POST /logout    — clear the session
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from billow import accounts
from billow.deps import get_db
from billow.errors import MalformedRequest
from billow.schemas import Credentials, ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def _require(creds: Credentials, message: str) -> tuple[str, str]:
    email = (creds.email or "").strip()
    if not email or not creds.password:
        raise MalformedRequest(message)
    return email, creds.password


@router.post(
    "/register",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
def register(creds: Credentials, db: Session = Depends(get_db)):
    email, password = _require(creds, "Email and password required")
    accounts.register(db, email, password)
    return MessageResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(creds: Credentials, request: Request, db: Session = Depends(get_db)):
    email, password = _require(creds, "Missing credentials")
    account = accounts.authenticate(db, email, password)
    request.session[accounts.SESSION_KEY] = account.id
    logger.info("Account %s logged in", account.id)
    return MessageResponse(message="Logged in successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request):
    request.session.clear()
    return MessageResponse(message="Logged out")
