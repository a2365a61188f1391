"""Compare every student's recorded total with the sum of approved requests.

Exits non-zero when at least one balance has drifted.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.keyclub.keyclub.container import build_container


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        supabase_config=settings.SUPABASE_CONFIG,
        admin_email=settings.ADMIN_EMAIL,
        admin_password_hash=settings.ADMIN_PASSWORD_HASH,
    )

    drifted = 0
    for student in container.student_service.list_students():
        audit = container.hour_request_service.audit_balance(student.s_number)
        if not audit.consistent:
            drifted += 1
            print(f"{audit.s_number}: recorded={audit.recorded_hours:.2f} approved={audit.approved_hours:.2f}")

    print(f"[keyclub] {drifted} student balance(s) out of sync")
    return 1 if drifted else 0


if __name__ == "__main__":
    raise SystemExit(main())
