import logging

from core.config import settings
from core.logging_config import add_service_info, get_logger


def test_add_service_info_keeps_explicit_keys():
    event = add_service_info(None, "info", {"event": "x", "service": "override"})

    assert event["service"] == "override"
    assert event["version"] == settings.VERSION
    assert event["environment"] == settings.ENVIRONMENT


def test_events_carry_service_identity(caplog):
    caplog.set_level(logging.INFO)
    get_logger("tests.logging").info("todo_created", todo_id="1")

    (record,) = [r for r in caplog.records if isinstance(r.msg, dict) and r.msg.get("event") == "todo_created"]
    assert record.msg["service"] == settings.PROJECT_NAME
    assert record.msg["version"] == settings.VERSION
    assert record.msg["todo_id"] == "1"


def test_grpc_library_logger_is_quieter_than_root():
    assert logging.getLogger("grpc").level >= logging.INFO
