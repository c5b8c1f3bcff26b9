"""Example: use the service layer directly (no Flask).

Prints this week's rota, one line per shift.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.staff_hub.staff_hub.common.datetime_utils import format_time
from src.staff_hub.staff_hub.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    names = container.employee_service.name_lookup()

    for day in container.shift_service.weekly_rota(date.today()):
        print(day.day.strftime("%a %d %b"))
        for shift in day.shifts:
            people = ", ".join(names.get(e, e) for e in shift.assigned_employees)
            print(f"  {format_time(shift.start_time)}-{format_time(shift.end_time)} {shift.department} [{shift.category.value}] {people}")


if __name__ == "__main__":
    main()
