from __future__ import annotations

import importlib
import sys
from pathlib import Path

from loguru import logger

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from config import get_settings_module

from overtime_register.database.bootstrap import apply_seed_sql, ensure_demo_profiles


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    ensure_demo_profiles(db_config)

    logger.info(
        "Seeded demo employees, overtime and accounts -> {}@{}:{}/{}",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )


if __name__ == "__main__":
    main()
