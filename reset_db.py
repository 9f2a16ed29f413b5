from sqlmodel import SQLModel

from finance_ledger.database import engine, create_db_and_tables
import finance_ledger.models  # noqa: F401

SQLModel.metadata.drop_all(engine)
create_db_and_tables()

print("Database reset: tables recreated and default categories seeded.")
