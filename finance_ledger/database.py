import logging
from contextlib import contextmanager

from sqlmodel import SQLModel, Session, create_engine

from finance_ledger.core.config import DATABASE_URL, SQL_ECHO

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=connect_args)


def create_db_and_tables(bind=None):
    import finance_ledger.models  # noqa: F401  registers every table on the metadata
    from finance_ledger.utils.category_helpers import seed_default_categories

    bind = bind or engine
    SQLModel.metadata.create_all(bind)
    with Session(bind) as session:
        seed_default_categories(session)
        session.commit()


def get_session():
    with Session(engine) as session:
        yield session


@contextmanager
def atomic(session: Session):
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
