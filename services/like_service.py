# services/like_service.py
"""
Favorites: toggle and list a user's liked kos.
"""
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Kos, UserLike
from utils.logger import log_db_operation


class DuplicateLikeError(Exception):
     """A concurrent request already inserted the same like."""


def toggle_like(db: Session, user_id: str, kos_id: str) -> bool:
     """
     Like the kos if the user has not, otherwise unlike it.

     Returns:
          True if the kos is now liked, False if the like was removed.

     Raises:
          DuplicateLikeError: If the insert hits the (user_id, kos_id) constraint.
     """
     existing = (
          db.query(UserLike)
          .filter(UserLike.user_id == user_id, UserLike.kos_id == kos_id)
          .first()
     )
     if existing:
          db.delete(existing)
          db.flush()
          log_db_operation("DELETE", "user_likes", True, 1)
          return False

     db.add(UserLike(user_id=user_id, kos_id=kos_id))
     try:
          db.flush()
     except IntegrityError as e:
          db.rollback()
          log_db_operation("INSERT", "user_likes", False, error=str(e.orig))
          raise DuplicateLikeError(kos_id) from e
     log_db_operation("INSERT", "user_likes", True, 1)
     return True


def liked_kos(db: Session, user_id: str) -> List[Kos]:
     """Kos liked by a user, most recent like first."""
     return (
          db.query(Kos)
          .join(UserLike, UserLike.kos_id == Kos.id)
          .filter(UserLike.user_id == user_id)
          .order_by(UserLike.created_at.desc())
          .all()
     )
