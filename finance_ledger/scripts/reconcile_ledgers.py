import argparse
import logging

from sqlmodel import Session, select

from finance_ledger import operations
from finance_ledger.database import engine
from finance_ledger.models.user import User

logger = logging.getLogger(__name__)


def reconcile_ledgers(apply: bool = True) -> int:
    """Runs reconciliation for every user. Returns how many values drifted in total."""
    total_drifts = 0
    with Session(engine) as session:
        users = session.exec(select(User)).all()
        for user in users:
            result = operations.reconcile_ledger(session, user.id, apply=apply)
            if not result.success:
                logger.error("Reconciliation failed for %s: %s", user.username, result.error)
                continue
            report = result.data
            total_drifts += len(report.drifts)
            for drift in report.drifts:
                print(
                    f"{user.username}: {drift.entity} {drift.entity_id} {drift.field} "
                    f"stored={drift.stored} expected={drift.expected}"
                )
    print(f"Reconciliation finished: {total_drifts} drifted value(s){' repaired' if apply else ''}.")
    return total_drifts


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Rebuild balances and budget totals from the transaction log.")
    parser.add_argument("--dry-run", action="store_true", help="only report drifts")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    reconcile_ledgers(apply=not args.dry_run)
