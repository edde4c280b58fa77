from __future__ import annotations

import importlib
import logging

from config import get_settings_module

from wellness_compliance.common.log import setup_logging
from wellness_compliance.database.bootstrap import apply_schema
from wellness_compliance.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(level="INFO", json_output=False)
    db_config = dict(settings.DB_CONFIG)

    count = apply_schema(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    logging.getLogger(__name__).info(
        "Applied %d statements -> %s@%s:%s/%s",
        count,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )


if __name__ == "__main__":
    main()
