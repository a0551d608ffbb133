# /psyassist/services/database_helpers/base_repository_sql.py

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


class BaseRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self) -> None:
        """
        Commits the current unit of work. On failure the session is rolled
        back, so the stored state is exactly what it was before the call, and
        the error propagates to the caller.
        """
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
