"""
Tests for the base job logger: status codec, safe append, system format.
"""

import json
import re
import threading
from datetime import datetime, timezone

import pytest

from src.jobs.entities import LogLevel, TriggeredJobStatus
from src.jobs.errors import LogWriteError, StatusWriteError
from src.jobs import job_logger
from src.jobs.job_logger import JobLogger, format_timestamp, release_file_locks
from src.jobs.triggered_run_logger import TriggeredJobRunLogger


START = datetime(2024, 3, 1, 8, 0, 0, tzinfo=timezone.utc)
END = datetime(2024, 3, 1, 8, 5, 30, tzinfo=timezone.utc)


class TestTriggeredJobStatus:
    """Tests for TriggeredJobStatus dataclass."""

    def test_default_is_empty(self):
        status = TriggeredJobStatus()
        assert status.status is None
        assert status.start_time is None
        assert status.end_time is None

    def test_to_dict_omits_unset_end_time(self):
        data = TriggeredJobStatus(status="Running", start_time=START).to_dict()

        assert data == {"status": "Running", "start_time": START.isoformat()}

    def test_to_dict_with_end_time(self):
        data = TriggeredJobStatus(status="Success", start_time=START, end_time=END).to_dict()
        assert data["end_time"] == END.isoformat()

    def test_from_dict(self):
        status = TriggeredJobStatus.from_dict(
            {"status": "Running", "start_time": "2024-03-01T08:00:00+00:00"}
        )
        assert status.status == "Running"
        assert status.start_time == START
        assert status.end_time is None

    def test_from_dict_naive_time_is_utc(self):
        status = TriggeredJobStatus.from_dict({"start_time": "2024-03-01T08:00:00"})
        assert status.start_time == START

    @pytest.mark.parametrize("data", [[], "Running", {"status": 5}, {"start_time": "yesterday"}])
    def test_from_dict_rejects_bad_shapes(self, data):
        with pytest.raises(ValueError):
            TriggeredJobStatus.from_dict(data)


class TestStatusCodec:
    """Tests for JobLogger.read_status / write_status."""

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "status"
        JobLogger.write_status(path, TriggeredJobStatus(status="Running", start_time=START))

        loaded = JobLogger.read_status(path)

        assert loaded == TriggeredJobStatus(status="Running", start_time=START)

    def test_written_as_json_object(self, tmp_path):
        path = tmp_path / "status"
        JobLogger.write_status(path, TriggeredJobStatus(status="Running", start_time=START))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["status"] == "Running"
        assert "end_time" not in data

    def test_read_missing_returns_none(self, tmp_path):
        assert JobLogger.read_status(tmp_path / "nope") is None

    @pytest.mark.parametrize("content", ["", "not json", "[1, 2]", '{"status": 42}'])
    def test_read_corrupt_returns_none(self, tmp_path, content):
        path = tmp_path / "status"
        path.write_text(content, encoding="utf-8")

        assert JobLogger.read_status(path) is None

    def test_read_directory_returns_none(self, tmp_path):
        (tmp_path / "status").mkdir()
        assert JobLogger.read_status(tmp_path / "status") is None

    def test_write_failure_raises(self, tmp_path):
        (tmp_path / "status").mkdir()

        with pytest.raises(StatusWriteError):
            JobLogger.write_status(tmp_path / "status", TriggeredJobStatus(status="Running"))


class TestSafeLogToFile:
    """Tests for JobLogger.safe_log_to_file."""

    def test_appends(self, tmp_path):
        path = tmp_path / "output.log"
        JobLogger.safe_log_to_file(path, "one\n")
        JobLogger.safe_log_to_file(path, "two\n")

        assert path.read_text(encoding="utf-8") == "one\ntwo\n"

    def test_failure_raises(self, tmp_path):
        (tmp_path / "output.log").mkdir()

        with pytest.raises(LogWriteError):
            JobLogger.safe_log_to_file(tmp_path / "output.log", "lost\n")

    def test_concurrent_appends_do_not_interleave(self, tmp_path):
        """Should keep each appended record intact under concurrent writers."""
        path = tmp_path / "output.log"
        payload = "x" * 2000

        def writer(tag: str):
            for i in range(100):
                JobLogger.safe_log_to_file(path, f"{tag}-{i} {payload}\n")

        threads = [threading.Thread(target=writer, args=(f"t{n}",)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 400
        assert all(re.fullmatch(r"t\d-\d+ x{2000}", line) for line in lines)


class TestReleaseFileLocks:
    """Tests for release_file_locks."""

    def test_drops_locks_under_directory(self, tmp_path):
        run_dir = tmp_path / "run"
        run_dir.mkdir()
        other = tmp_path / "other.log"
        JobLogger.safe_log_to_file(run_dir / "output.log", "one\n")
        JobLogger.safe_log_to_file(run_dir / "error.log", "two\n")
        JobLogger.safe_log_to_file(other, "three\n")

        assert release_file_locks(run_dir) == 2

        keys = [k for k in job_logger._file_locks if k.startswith(str(tmp_path.resolve()))]
        assert keys == [str(other.resolve())]

    def test_sibling_with_shared_prefix_kept(self, tmp_path):
        """Should not drop locks of a directory whose name extends the released one."""
        (tmp_path / "run").mkdir()
        (tmp_path / "run2").mkdir()
        JobLogger.safe_log_to_file(tmp_path / "run2" / "output.log", "kept\n")

        assert release_file_locks(tmp_path / "run") == 0
        assert str((tmp_path / "run2" / "output.log").resolve()) in job_logger._file_locks


class TestSystemFormat:
    """Tests for the system message format."""

    def test_format(self, history_root):
        run_logger = TriggeredJobRunLogger(
            "nightly", "202403010800000000", history_root=history_root, instance_id="web01"
        )

        line = run_logger.get_system_formatted_message(LogLevel.WARN, "low disk")

        assert re.fullmatch(r"\[\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2} > web01: WARN\] low disk\n", line)

    def test_format_timestamp(self):
        assert format_timestamp(END) == "03/01/2024 08:05:30"
