import sys
import os
import logging
import tempfile
import unittest
from unittest.mock import patch, MagicMock
from datetime import datetime, timezone
from io import StringIO

# Add the parent directory to sys.path to import the togglpy package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from togglpy.__main__ import create_client, get_env_var, main, parse_args, run
from togglpy.api.client import Project, TogglTimeEntry
from togglpy.errors import ConfigError, InvalidDateFormat, RemoteRequestError
from togglpy.utils.date_utils import FixedClock
from togglpy.utils.log_utils import TRACE, setup_logging


class FakeToggl:
    def __init__(self, entries=(), projects=()):
        self.entries = list(entries)
        self.projects = list(projects)
        self.ranges = []

    def read_time_entries(self, start, end):
        self.ranges.append((start, end))
        return self.entries

    def read_projects(self):
        return self.projects


class TestTogglPyFunctionality(unittest.TestCase):
    """Test the complete functionality of the togglpy package."""

    def setUp(self):
        """Set up test fixtures."""
        self.clock = FixedClock(datetime(2024, 1, 5, 4, 0, tzinfo=timezone.utc))
        self.output = StringIO()
        self.toggl = FakeToggl(
            entries=[
                TogglTimeEntry(2, "entry2", "2024-01-05T12:00:00+00:00", "2024-01-05T13:00:00+00:00", 3600),
                TogglTimeEntry(1, "entry1", "2024-01-05T10:00:00+00:00", "2024-01-05T11:00:00+00:00", 3600),
                TogglTimeEntry(3, "entry3", "2024-01-06T09:00:00+00:00", "2024-01-06T10:30:00+00:00", 5400,
                               100, ["t1", "t2"]),
            ],
            projects=[Project(100, "P")],
        )

    def test_daily_listing(self):
        self.toggl.entries = self.toggl.entries[:2]
        run(parse_args(["daily"]), self.toggl, self.clock, timezone.utc, self.output)

        self.assertEqual(self.output.getvalue(), "- 10:00 ~ 11:00: entry1\n- 12:00 ~ 13:00: entry2\n")
        self.assertEqual(self.toggl.ranges, [(datetime(2024, 1, 5, tzinfo=timezone.utc),
                                              datetime(2024, 1, 6, tzinfo=timezone.utc))])

    def test_daily_with_date(self):
        run(parse_args(["daily", "--date", "2024-01-02"]), self.toggl, self.clock, timezone.utc, self.output)
        self.assertEqual(self.toggl.ranges[0][0], datetime(2024, 1, 2, tzinfo=timezone.utc))

    def test_daily_with_invalid_date(self):
        with self.assertRaises(InvalidDateFormat):
            run(parse_args(["daily", "-d", "02/01/2024"]), self.toggl, self.clock, timezone.utc, self.output)

    def test_monthly_totals(self):
        run(parse_args(["monthly", "-m", "2024-01"]), self.toggl, self.clock, timezone.utc, self.output)

        self.assertEqual(self.toggl.ranges, [(datetime(2024, 1, 1, tzinfo=timezone.utc),
                                              datetime(2024, 2, 1, tzinfo=timezone.utc))])
        self.assertEqual(self.output.getvalue(), "- No project\n- P\n    - t1: 1.50\n    - t2: 1.50\n")

    def test_monthly_daily_totals(self):
        run(parse_args(["monthly", "--daily"]), self.toggl, self.clock, timezone.utc, self.output)

        output = self.output.getvalue()
        self.assertIn("## 2024-01-05", output)
        self.assertIn("## 2024-01-06", output)
        self.assertLess(output.index("## 2024-01-05"), output.index("## 2024-01-06"))

    def test_monthly_table(self):
        run(parse_args(["monthly", "--format", "table"]), self.toggl, self.clock, timezone.utc, self.output)
        self.assertIn("| Project", self.output.getvalue())

    def test_markdown_export(self):
        with tempfile.TemporaryDirectory() as tmp:
            md_path = os.path.join(tmp, "report.md")
            args = parse_args(["monthly", "--md", md_path])
            run(args, self.toggl, self.clock, timezone.utc, self.output)
            run(args, self.toggl, self.clock, timezone.utc, self.output)

            with open(md_path, encoding="utf-8") as f:
                content = f.read()

        self.assertEqual(self.output.getvalue(), "")
        self.assertTrue(content.startswith("# Hours of 2024-01\n"))
        self.assertEqual(content.count("# Hours of 2024-01"), 1)
        self.assertEqual(content.count("    - t1: 1.50"), 2)

    def test_parse_args(self):
        args = parse_args(["-v", "debug", "monthly", "--month", "2024-02", "--daily"])
        self.assertEqual(args.verbosity, "debug")
        self.assertEqual(args.command, "monthly")
        self.assertEqual(args.month, "2024-02")
        self.assertTrue(args.daily)
        self.assertEqual(args.fmt, "list")

    def test_parse_args_requires_command(self):
        with patch('sys.stderr', new_callable=StringIO):
            with self.assertRaises(SystemExit) as ctx:
                parse_args([])
        self.assertEqual(ctx.exception.code, 2)

    @patch.dict('os.environ', {}, clear=True)
    def test_missing_token(self):
        with self.assertRaises(ConfigError):
            get_env_var("TOGGL_API_TOKEN")
        with self.assertRaises(ConfigError):
            create_client()

    @patch.dict('os.environ', {'TOGGL_API_TOKEN': 'test_token', 'TOGGLPY_TIMEOUT': 'soon'}, clear=True)
    def test_invalid_timeout(self):
        with self.assertRaises(ConfigError):
            create_client()

    @patch.dict('os.environ', {'TOGGL_API_TOKEN': 'test_token', 'TOGGL_API_URL': 'http://localhost/api/v9',
                               'TOGGLPY_TIMEOUT': '2.5'}, clear=True)
    def test_create_client(self):
        client = create_client()
        self.assertEqual(client.api_token, "test_token")
        self.assertEqual(client.base_url, "http://localhost/api/v9")
        self.assertEqual(client.timeout, 2.5)

    @patch('togglpy.__main__.setup_logging')
    @patch('togglpy.__main__.load_environment')
    @patch.dict('os.environ', {}, clear=True)
    def test_main_missing_token_exits_non_zero(self, mock_load_env, mock_setup_logging):
        with self.assertLogs("togglpy", level="ERROR") as logs:
            code = main(["daily"])
        self.assertEqual(code, 1)
        self.assertIn("TOGGL_API_TOKEN", "\n".join(logs.output))

    @patch('togglpy.__main__.local_timezone', return_value=timezone.utc)
    @patch('togglpy.__main__.create_client')
    @patch('togglpy.__main__.setup_logging')
    @patch('togglpy.__main__.load_environment')
    def test_main_logs_cause_chain(self, mock_load_env, mock_setup_logging, mock_create_client, mock_tz):
        client = MagicMock()
        try:
            raise ConnectionError("connection refused")
        except ConnectionError as cause:
            error = RemoteRequestError("Failed to send request to Toggl API")
            error.__cause__ = cause
        client.read_time_entries.side_effect = error
        client.read_projects.return_value = []
        mock_create_client.return_value = client

        with self.assertLogs("togglpy", level="ERROR") as logs:
            code = main(["monthly"])

        self.assertEqual(code, 1)
        output = "\n".join(logs.output)
        self.assertIn("Failed to send request to Toggl API", output)
        self.assertIn("Caused by: ConnectionError: connection refused", output)

    @patch('togglpy.__main__.local_timezone', return_value=timezone.utc)
    @patch('togglpy.__main__.create_client')
    @patch('togglpy.__main__.setup_logging')
    @patch('togglpy.__main__.load_environment')
    @patch('sys.stdout', new_callable=StringIO)
    def test_main_success(self, mock_stdout, mock_load_env, mock_setup_logging, mock_create_client, mock_tz):
        mock_create_client.return_value = self.toggl

        code = main(["-v", "warn", "monthly", "-m", "2024-01"])

        self.assertEqual(code, 0)
        mock_setup_logging.assert_called_once()
        self.assertEqual(mock_setup_logging.call_args[0][0], "warn")
        self.assertIn("- P\n", mock_stdout.getvalue())


class TestSetupLogging(unittest.TestCase):
    """Test the logging configuration."""

    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        for handler in list(self.root.handlers):
            self.root.removeHandler(handler)
            handler.close()
        for handler in self.saved_handlers:
            self.root.addHandler(handler)
        self.root.setLevel(self.saved_level)
        self.tmp.cleanup()

    def test_log_files(self):
        with patch('sys.stderr', new_callable=StringIO):
            log_dir = setup_logging("error", os.path.join(self.tmp.name, "logs"))
            logger = logging.getLogger("togglpy.test")
            logger.info("info message")
            logger.error("error message")
            logger.debug("debug message")
        for handler in self.root.handlers:
            handler.flush()

        with open(os.path.join(log_dir, "info.log"), encoding="utf-8") as f:
            info_log = f.read()
        with open(os.path.join(log_dir, "error.log"), encoding="utf-8") as f:
            error_log = f.read()

        self.assertIn("info message", info_log)
        self.assertIn("error message", info_log)
        self.assertNotIn("debug message", info_log)
        self.assertNotIn("info message", error_log)
        self.assertIn("error message", error_log)

    def test_trace_level(self):
        with patch('sys.stderr', new_callable=StringIO) as mock_stderr:
            setup_logging("trace", self.tmp.name)
            logging.getLogger("togglpy.test").log(TRACE, "trace message")
        self.assertIn("TRACE", mock_stderr.getvalue())
        self.assertIn("trace message", mock_stderr.getvalue())

    def test_log_dir_is_a_file(self):
        log_file = os.path.join(self.tmp.name, "not_a_dir")
        with open(log_file, "w", encoding="utf-8") as f:
            f.write("")

        with patch('sys.stderr', new_callable=StringIO):
            with self.assertRaises(ConfigError) as ctx:
                setup_logging("info", log_file)
        self.assertIn(log_file, str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, OSError)

    @patch('togglpy.__main__.load_environment')
    def test_main_with_unusable_log_dir_exits_non_zero(self, mock_load_env):
        log_file = os.path.join(self.tmp.name, "not_a_dir")
        with open(log_file, "w", encoding="utf-8") as f:
            f.write("")

        with patch.dict('os.environ', {'TOGGLPY_LOG_DIR': log_file}, clear=True):
            with patch('sys.stderr', new_callable=StringIO) as mock_stderr:
                code = main(["daily"])

        self.assertEqual(code, 1)
        self.assertIn("Cannot use log directory", mock_stderr.getvalue())
        self.assertIn("Caused by: FileExistsError", mock_stderr.getvalue())


if __name__ == '__main__':
    unittest.main()
