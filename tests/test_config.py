"""Tests for the configuration system and the CLI wiring."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from config.defaults import default_app_config
from config.manager import ConfigManager
from config.schema import AppConfig, BehaviourConfig, LogLevel, StorageConfig


# ─── DEFAULT CONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_paths(self):
        """Defaults match the classic folder layout."""
        sc = default_app_config().storage
        assert sc.students_file == Path(".") / "Students" / "students.csv"
        assert sc.courses_file == Path(".") / "Courses" / "courses.csv"
        assert sc.course_reports_dir == Path(".") / "Reports" / "CourseReports"
        assert sc.student_reports_dir == Path(".") / "Reports" / "StudentReports"

    def test_default_behaviour(self):
        """Load, autosave and case-sensitive search are on by default."""
        bc = default_app_config().behaviour
        assert bc.load_on_start is True
        assert bc.autosave_on_exit is True
        assert bc.cancel_keyword == "esc"
        assert bc.case_sensitive_search is True

    def test_default_logging(self):
        lc = default_app_config().logging
        assert lc.level == LogLevel.WARNING
        assert lc.file is None


# ─── PYDANTIC VALIDATION ──────────────────────────────────────────────────────

class TestPydanticValidation:
    def test_base_dir_relocates_everything(self, tmp_path: Path):
        """All derived paths live below base_dir."""
        sc = StorageConfig(base_dir=tmp_path)
        assert sc.students_file.parent.parent == tmp_path
        assert sc.excel_path == tmp_path / "Reports" / "roster.xlsx"

    def test_empty_folder_rejected(self):
        """Folder names must not be empty."""
        with pytest.raises(Exception):
            StorageConfig(students_dir="   ")

    def test_cancel_keyword_normalised(self):
        """Cancel keyword is trimmed and lower-cased."""
        assert BehaviourConfig(cancel_keyword=" ESC ").cancel_keyword == "esc"

    def test_empty_cancel_keyword_rejected(self):
        with pytest.raises(Exception):
            BehaviourConfig(cancel_keyword="")

    def test_unknown_log_level_rejected(self):
        with pytest.raises(Exception):
            AppConfig.model_validate({"logging": {"level": "LOUD"}})


# ─── YAML SAVE / LOAD ─────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Saved config loads back unchanged."""
        config = default_app_config()
        config = config.model_copy(update={
            "behaviour": BehaviourConfig(autosave_on_exit=False, cancel_keyword="quit"),
        })
        mgr = ConfigManager(tmp_path / "roster_config.yaml")
        mgr.save(config)
        assert mgr.DEFAULT_CONFIG.exists()

        loaded = mgr.load()
        assert loaded.behaviour.autosave_on_exit is False
        assert loaded.behaviour.cancel_keyword == "quit"
        assert loaded.storage.students_dir == "Students"

    def test_saved_file_has_section_comments(self, tmp_path: Path):
        """YAML carries a comment per section."""
        mgr = ConfigManager(tmp_path / "roster_config.yaml")
        mgr.save(default_app_config())
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert "─── Storage ───" in text
        assert "─── Behaviour ───" in text

    def test_first_run_check(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "roster_config.yaml")
        assert mgr.first_run_check() is True
        mgr.save(default_app_config())
        assert mgr.first_run_check() is False

    def test_load_or_default_without_file(self, tmp_path: Path):
        """No file: the defaults are used."""
        mgr = ConfigManager(tmp_path / "missing.yaml")
        assert mgr.load_or_default() == default_app_config()

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_invalid_file_raises_value_error(self, tmp_path: Path):
        """Invalid values name the file in the error."""
        path = tmp_path / "bad.yaml"
        path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid config file"):
            ConfigManager(path).load()

    def test_yaml_syntax_error_raises_value_error(self, tmp_path: Path):
        """Broken YAML is reported like invalid values."""
        path = tmp_path / "broken.yaml"
        path.write_text("storage: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid config file"):
            ConfigManager(path).load()

    def test_partial_file_uses_defaults(self, tmp_path: Path):
        """Missing sections fall back to their defaults."""
        path = tmp_path / "partial.yaml"
        path.write_text("behaviour:\n  load_on_start: false\n", encoding="utf-8")
        config = ConfigManager(path).load()
        assert config.behaviour.load_on_start is False
        assert config.storage.reports_dir == "Reports"


# ─── CLI ──────────────────────────────────────────────────────────────────────

class TestCli:
    def test_help(self):
        """--help works without a config file."""
        from main import cli
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Usage" in result.output

    @pytest.mark.parametrize("command", [
        "menu", "setup", "students", "courses", "search",
        "report", "export", "populate", "validate", "config",
    ])
    def test_command_registered(self, command):
        from main import cli
        result = CliRunner().invoke(cli, [command, "--help"])
        assert result.exit_code == 0

    def test_config_show_without_file(self):
        """Without a file the defaults are shown."""
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["config", "show"])
            assert result.exit_code == 0
            assert "defaults" in result.output

    def test_populate_then_list(self):
        """populate writes both CSV files, list commands read them back."""
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["populate"])
            assert result.exit_code == 0
            assert Path("Students/students.csv").exists()
            assert Path("Courses/courses.csv").exists()

            result = runner.invoke(cli, ["students"])
            assert result.exit_code == 0
            assert "S003" in result.output

            result = runner.invoke(cli, ["courses"])
            assert "CSE104" in result.output

    def test_search(self):
        """search matches course codes and reports no hits."""
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            runner.invoke(cli, ["populate"])
            result = runner.invoke(cli, ["search", "CSE103"])
            assert "S003" in result.output
            assert "S001" not in result.output

            result = runner.invoke(cli, ["search", "nobody"])
            assert "No matching student found." in result.output

    def test_reports(self):
        """Both report commands write their CSV file."""
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            runner.invoke(cli, ["populate"])
            result = runner.invoke(cli, ["report", "course", "CSE101"])
            assert result.exit_code == 0
            assert Path("Reports/CourseReports/CSE101.csv").exists()

            result = runner.invoke(cli, ["report", "student", "S001"])
            assert result.exit_code == 0
            assert Path("Reports/StudentReports/S001.csv").exists()

    def test_report_unknown_course_fails(self):
        """Unknown course exits with code 1."""
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["report", "course", "NOPE"])
            assert result.exit_code == 1
            assert "not found" in result.output

    def test_export_excel(self):
        """--excel writes the workbook to the configured path."""
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            runner.invoke(cli, ["populate"])
            result = runner.invoke(cli, ["export", "--excel"])
            assert result.exit_code == 0
            assert Path("Reports/roster.xlsx").exists()

    def test_validate(self):
        """Exit code 0 for consistent data, 1 after breaking a file."""
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            runner.invoke(cli, ["populate"])
            assert runner.invoke(cli, ["validate"]).exit_code == 0

            Path("Courses/courses.csv").write_text(
                "CourseCode,CourseName,EnrolledStudents\nCSE101,Intro,S001\n",
                encoding="utf-8",
            )
            assert runner.invoke(cli, ["validate"]).exit_code == 1

    def test_config_option(self, tmp_path: Path):
        """--config points the commands at another data folder."""
        from main import cli
        cfg = tmp_path / "custom.yaml"
        data_dir = tmp_path / "data"
        cfg.write_text(f"storage:\n  base_dir: {data_dir.as_posix()}\n", encoding="utf-8")
        result = CliRunner().invoke(cli, ["--config", str(cfg), "populate"])
        assert result.exit_code == 0
        assert (data_dir / "Students" / "students.csv").exists()

    def test_broken_config_exits_cleanly(self, tmp_path: Path):
        """A config with a YAML syntax error ends with a message and code 1."""
        from main import cli
        cfg = tmp_path / "broken.yaml"
        cfg.write_text("storage: [unclosed\n", encoding="utf-8")
        result = CliRunner().invoke(cli, ["--config", str(cfg), "students"])
        assert result.exit_code == 1
        assert "Invalid config file" in result.output

    def test_unreadable_data_file_exits_cleanly(self):
        """A students.csv that is not UTF-8 ends with a message and code 1."""
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("Students").mkdir()
            Path("Students/students.csv").write_bytes(
                b"StudentID,Name,Type,EnrolledCourses\nS001,\xff\xfe,Undergraduate,\n"
            )
            result = runner.invoke(cli, ["students"])
            assert result.exit_code == 1
            assert "Loading failed" in result.output
