# bigbasket/api/dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session

from bigbasket.data.database import get_db
from bigbasket.repos.base import Repository
from bigbasket.repos.sql_repository import SqlRepository
from bigbasket.services.lock_service import LockService
from bigbasket.services.notification_service import NotificationService


def get_repository(db: Session = Depends(get_db)) -> Repository:
    return SqlRepository(
        db=db,
        lock_service=LockService(),
        notification_service=NotificationService(),
    )
