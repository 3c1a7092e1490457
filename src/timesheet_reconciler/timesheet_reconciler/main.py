from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import (
    DEFAULT_DIFF_EPSILON,
    DEFAULT_ICS_PRODID,
    DEFAULT_ICS_UID_DOMAIN,
    DEFAULT_PALETTE,
    DEFAULT_WEEKLY_TARGET_HOURS,
)
from .report.controller import register as register_reports

logger = logging.getLogger(__name__)


def _setting(settings, name: str, default):
    value = getattr(settings, name, None)
    return default if value is None else value


def report_config_from(settings) -> dict:
    return {
        "epsilon": _setting(settings, "DIFF_EPSILON", DEFAULT_DIFF_EPSILON),
        "target_weekly_hours": _setting(settings, "WEEKLY_TARGET_HOURS", DEFAULT_WEEKLY_TARGET_HOURS),
        "open_punch_policy": _setting(settings, "OPEN_PUNCH_POLICY", "EXCLUDE"),
        "palette": _setting(settings, "CALENDAR_PALETTE", DEFAULT_PALETTE),
        "ics_prodid": _setting(settings, "ICS_PRODID", DEFAULT_ICS_PRODID),
        "ics_uid_domain": _setting(settings, "ICS_UID_DOMAIN", DEFAULT_ICS_UID_DOMAIN),
        "snapshot_path": getattr(settings, "SNAPSHOT_PATH", None),
    }


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    report_config = report_config_from(settings)
    logger.info(
        "settings=%s snapshot=%s open_punch_policy=%s",
        settings_module, report_config["snapshot_path"] or "-", report_config["open_punch_policy"],
    )

    container = container or build_container(report_config=report_config)
    register_reports(app, container)

    return app
