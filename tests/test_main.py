# tests/test_main.py
import json
import sys

import pytest

import main as cli
from autocleanx.config import Config

class TestMain:

    @pytest.fixture
    def cli_config(self, monkeypatch, tmp_path):
        config = Config()
        config.paths.LOGS_DIR = tmp_path / "logs"
        monkeypatch.setattr(cli, "get_config", lambda config_file=None: config)
        monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
        return config

    def run_cli(self, monkeypatch, *args):
        monkeypatch.setattr(sys, "argv", ["main.py", *args])
        cli.main()

    def test_writes_exports_and_config(self, monkeypatch, tmp_path, cli_config, sample_csv_file):
        out_dir = tmp_path / "out"
        saved = tmp_path / "effective.json"

        self.run_cli(monkeypatch, "--data-path", str(sample_csv_file), "--output-dir", str(out_dir),
                     "--save-config", str(saved))

        assert (out_dir / "cleaned_orders.csv").is_file()
        assert (out_dir / "report_orders.json").is_file()
        assert (out_dir / "report_orders.html").is_file()
        assert (tmp_path / "logs").is_dir()
        assert json.loads(saved.read_text())["paths"]["OUTPUT_DIR"] == str(out_dir)

    def test_invalid_config_exits(self, monkeypatch, tmp_path, cli_config, sample_csv_file, capsys):
        cli_config.inference.CATEGORICAL_MAX_UNIQUE_RATIO = 0

        with pytest.raises(SystemExit) as excinfo:
            self.run_cli(monkeypatch, "--data-path", str(sample_csv_file), "--output-dir", str(tmp_path))

        assert excinfo.value.code == 1
        assert "Configuration error" in capsys.readouterr().out

    def test_analysis_error_exits(self, monkeypatch, tmp_path, cli_config):
        bad = tmp_path / "bad.csv"
        bad.write_text("a,b,c\n1,2,3\n4\n")

        with pytest.raises(SystemExit) as excinfo:
            self.run_cli(monkeypatch, "--data-path", str(bad), "--output-dir", str(tmp_path / "out"))

        assert excinfo.value.code == 1
