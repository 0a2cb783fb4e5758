"""Tests for the retry decorator."""
import subprocess
from unittest.mock import Mock, patch

import pytest

from skeletor.core.retry import retry


class TestRetry:
    @patch('skeletor.core.retry.time.sleep')
    def test_backoff_between_attempts(self, mock_sleep):
        func = Mock(side_effect=[
            subprocess.CalledProcessError(128, ['git']),
            subprocess.CalledProcessError(128, ['git']),
            "cloned",
        ])
        func.__name__ = "clone"

        wrapped = retry(max_attempts=3, delay=0.5, exceptions=(subprocess.CalledProcessError,))(func)

        assert wrapped("url") == "cloned"
        assert func.call_count == 3
        assert [c[0][0] for c in mock_sleep.call_args_list] == [0.5, 1.0]

    @patch('skeletor.core.retry.time.sleep')
    def test_reraises_last_failure(self, mock_sleep):
        error = subprocess.CalledProcessError(128, ['git'], stderr="not found")
        func = Mock(side_effect=error)
        func.__name__ = "clone"

        with pytest.raises(subprocess.CalledProcessError) as exc:
            retry(max_attempts=2, delay=0, exceptions=(subprocess.CalledProcessError,))(func)()

        assert exc.value is error
        assert func.call_count == 2
        assert mock_sleep.call_count == 1

    @patch('skeletor.core.retry.time.sleep')
    def test_other_exceptions_are_not_retried(self, mock_sleep):
        func = Mock(side_effect=FileNotFoundError("git"))
        func.__name__ = "clone"

        with pytest.raises(FileNotFoundError):
            retry(max_attempts=3, exceptions=(subprocess.CalledProcessError,))(func)()

        assert func.call_count == 1
        mock_sleep.assert_not_called()
