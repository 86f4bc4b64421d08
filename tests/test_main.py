import logging
from unittest.mock import patch

import pytest

import main
from core.initialization import SettingsError


@patch("main.web.run_app")
@patch("main.load_settings", side_effect=SettingsError("Error loading config: bad bot id"))
def test_settings_error_is_logged_and_aborts(mock_load, mock_run_app, caplog):
    caplog.set_level(logging.INFO)

    with pytest.raises(SystemExit) as exc_info:
        main.main()

    assert exc_info.value.code == 1
    failures = [r for r in caplog.records if r.levelno == logging.CRITICAL]
    assert len(failures) == 1
    assert "failed to start" in failures[0].getMessage()
    assert "bad bot id" in failures[0].getMessage()
    mock_run_app.assert_not_called()
