"""Example: call the gateway directly (no Flask).

Controllers stay thin; every rule lives in the services behind LedgerGateway.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.school_attendance.school_attendance.access.identity import Caller
from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import Role


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    admin = Caller(user_id="admin-1", role=Role.SUPERADMIN)
    result = container.ledger_gateway.get_dashboard(admin, date.today())
    print(result.data if result.ok else result.error_dict())


if __name__ == "__main__":
    main()
