"""tests/test_scripts.py"""
import importlib.util
from pathlib import Path
from unittest.mock import patch

import pytest

SCRIPTS = Path(__file__).parent.parent / "scripts"


def _load(name: str):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestRunAnalysisScript:
    def setup_method(self):
        self.script = _load("02_run_analysis")

    def test_archive_without_predict_rejected(self):
        with patch("sys.argv", ["02_run_analysis.py", "--csv", "x.csv", "--archive"]):
            with pytest.raises(SystemExit) as exc:
                self.script.main()
        assert exc.value.code == 2

    def test_delete(self):
        with patch.object(self.script, "delete_prediction") as mock_delete:
            with patch("sys.argv", ["02_run_analysis.py", "--delete", "abc"]):
                self.script.main()
        mock_delete.assert_called_once_with("abc")
