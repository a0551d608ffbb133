# /psyassist/services/database_helpers/child_repository_sql.py

"""
Raw SQLAlchemy queries for the Child table.

Every method is scoped by `user_id`: a child owned by another user behaves
exactly like a child that does not exist.
"""

from typing import Dict, List, Optional

from ...db.models.child_models import Child
from .base_repository_sql import BaseRepositorySQL


class ChildRepositorySQL(BaseRepositorySQL):

    def add_child(self, record: Dict) -> Child:
        """Creates a new Child. Expects `user_id` to be stamped on the record."""
        new_child = Child(**record)
        self.db.add(new_child)
        self._commit()
        self.db.refresh(new_child)
        return new_child

    def get_child(self, child_id: str, user_id: str) -> Optional[Child]:
        return self.db.query(Child).filter(Child.id == child_id, Child.user_id == user_id).first()

    def get_all_children(self, user_id: str) -> List[Child]:
        """All children of the user, most recently created first."""
        return (
            self.db.query(Child)
            .filter(Child.user_id == user_id)
            .order_by(Child.created_at.desc())
            .all()
        )

    def update_child(self, child_id: str, user_id: str, data: Dict) -> Optional[Child]:
        db_child = self.get_child(child_id=child_id, user_id=user_id)
        if db_child:
            for key, value in data.items():
                setattr(db_child, key, value)
            self._commit()
            self.db.refresh(db_child)
        return db_child

    def delete_child(self, child_id: str, user_id: str) -> bool:
        db_child = self.get_child(child_id=child_id, user_id=user_id)
        if db_child:
            # The cascade on Child.assessments removes the child's assessments and reports.
            self.db.delete(db_child)
            self._commit()
            return True
        return False

    def count_children(self, user_id: str) -> int:
        return self.db.query(Child).filter(Child.user_id == user_id).count()
