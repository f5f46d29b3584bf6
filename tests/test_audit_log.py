import datetime
import os

from nextbus.audit_log import AuditLog, generate_log_filename


def test_generate_log_filename():
    now = datetime.datetime(2025, 1, 1, 9, 30, 0, 123456, tzinfo=datetime.timezone.utc)
    path = generate_log_filename("logs", now)
    assert path == os.path.join("logs", "log-2025-01-01T09-30-00_123Z.txt")


def test_generate_log_filename_is_utc():
    auckland = datetime.timezone(datetime.timedelta(hours=13))
    now = datetime.datetime(2025, 1, 1, 22, 30, 0, tzinfo=auckland)
    assert generate_log_filename("logs", now).endswith("log-2025-01-01T09-30-00_000Z.txt")


def test_audit_log_default_name_is_utc(tmp_path):
    audit_log = AuditLog(str(tmp_path))
    assert os.path.basename(audit_log.path).endswith("Z.txt")


def test_audit_log_appends_request_and_response(tmp_path):
    audit_log = AuditLog(str(tmp_path / "logs"))
    audit_log.before_request("https://api.example.org/api/where/agencies-with-coverage.json",
                             {"method": "GET", "params": {"key": "***"}})
    audit_log.after_response("https://api.example.org/api/where/agencies-with-coverage.json",
                             200, {"code": 200, "data": {"list": []}})
    audit_log.before_request("https://api.example.org/api/where/routes-for-agency/1.json", {"method": "GET"})
    audit_log.after_response("https://api.example.org/api/where/routes-for-agency/1.json", None, None)

    with open(audit_log.path, encoding="utf-8") as f:
        text = f.read()
    assert text.count("Request:") == 2
    assert "Response (200):" in text
    assert '"key": "***"' in text
    assert "(no response received)" in text
    assert text.index("agencies-with-coverage") < text.index("routes-for-agency")


def test_audit_log_never_raises(tmp_path, caplog):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    audit_log = AuditLog(str(blocker))
    audit_log.before_request("https://api.example.org", {})
    audit_log.after_response("https://api.example.org", 200, "plain text body")
    assert "Could not write audit log" in caplog.text
