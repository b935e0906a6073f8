from __future__ import annotations

import importlib
import random
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "hrm_system"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from hrm_system.common.datetime_utils import now_local
from hrm_system.container import build_container
from hrm_system.database.bootstrap import apply_seed_sql
from hrm_system.payroll.demo_seed import build_demo_salary_records

DEMO_SALARY_EMAIL = "employee@test.com"


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    container = build_container(db_config=db_config)
    employee = next(
        (e for e in container.employees_repo.list_active() if e.email == DEMO_SALARY_EMAIL),
        None,
    )
    if employee is None:
        raise SystemExit(f"Demo employee {DEMO_SALARY_EMAIL} not found after seeding")

    created = 0
    for record in build_demo_salary_records(employee.employee_id, today=now_local().date(), rng=random.Random()):
        if container.salary_records_repo.get_for_period(employee.employee_id, record.period_year, record.period_month):
            continue
        container.salary_records_repo.insert(record)
        created += 1

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(salary records created={created})"
    )


if __name__ == "__main__":
    main()
