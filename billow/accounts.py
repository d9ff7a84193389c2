"""
Account registration and credential checks.

Thin wrapper around passlib; the receipt core only ever sees the account id
that the login route puts into the session.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from billow.config import settings
from billow.errors import AccountExists, InvalidCredentials
from billow.models.account import AccountModel

logger = logging.getLogger(__name__)

SESSION_KEY = "user_id"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def register(db: Session, email: str, password: str) -> AccountModel:
    account = AccountModel(email=email, password=pwd_context.hash(password))
    db.add(account)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise AccountExists() from exc
    db.refresh(account)
    logger.info("Registered account %s", account.id)
    return account


def authenticate(db: Session, email: str, password: str) -> AccountModel:
    account = db.query(AccountModel).filter(AccountModel.email == email).first()
    if not account or not pwd_context.verify(password, account.password):
        logger.warning("Failed login for %s", email)
        raise InvalidCredentials()
    return account


def current_account_id(request: Request) -> Optional[int]:
    """Account bound to the request's session, or None."""
    value = request.session.get(SESSION_KEY)
    return int(value) if value is not None else None
