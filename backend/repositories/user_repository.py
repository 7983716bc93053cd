# backend/repositories/user_repository.py
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import DuplicateRecord
from models.users import User


class UserRepository(Protocol):
    """User store used by the services. Lookups return None when nothing matches."""

    def create(self, user: User) -> User: ...

    def get_all(self) -> List[User]: ...

    def get_by_id(self, user_id: str) -> Optional[User]: ...

    def get_by_phone(self, phone: str) -> Optional[User]: ...

    def get_by_name(self, name: str) -> List[User]: ...

    def uid_exists(self, uid: str) -> bool: ...

    def update(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]: ...

    def mark_entered(self, user_id: str, now: datetime, *, clear_faculty: bool = False) -> bool: ...

    def delete(self, user_id: str) -> bool: ...


class SqlUserRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user: User) -> User:
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecord(str(e.orig))
        self.db.refresh(user)
        return user

    def get_all(self) -> List[User]:
        return self.db.query(User).order_by(User.registered_at).all()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_phone(self, phone: str) -> Optional[User]:
        return self.db.query(User).filter(User.phone == phone).first()

    def get_by_name(self, name: str) -> List[User]:
        return self.db.query(User).filter(User.name.ilike(f"%{name}%")).all()

    def uid_exists(self, uid: str) -> bool:
        return self.db.query(User.id).filter(User.uid == uid).first() is not None

    # Merges only the given fields into the stored row
    def update(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        user = self.get_by_id(user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecord(str(e.orig))
        self.db.refresh(user)
        return user

    # Sets last_entered only if the user has not entered on now's calendar day.
    # Returns False when another scan got there first.
    def mark_entered(self, user_id: str, now: datetime, *, clear_faculty: bool = False) -> bool:
        day_start = datetime.combine(now.date(), time.min)
        day_end = day_start + timedelta(days=1)
        values = {"last_entered": now}
        if clear_faculty:
            values["faculty"] = None

        stmt = (
            update(User)
            .where(
                User.id == user_id,
                or_(
                    User.last_entered.is_(None),
                    User.last_entered < day_start,
                    User.last_entered >= day_end,
                ),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.commit()
        self.db.expire_all()
        return result.rowcount == 1

    def delete(self, user_id: str) -> bool:
        user = self.get_by_id(user_id)
        if user is None:
            return False
        self.db.delete(user)
        self.db.commit()
        return True
