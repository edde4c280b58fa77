"""Example: build a team report through the service layer (no Flask).

Controllers are a thin layer; every figure comes from the services.
"""

import importlib
import json

from config import get_settings_module

from wellness_compliance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, dispatch_inline=True)
    report = container.team_report_service.build_team_report("org-1", "team-1", period="7days")
    print(json.dumps(report.to_dict(), indent=2))


if __name__ == "__main__":
    main()
