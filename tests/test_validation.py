"""Tests for post-generation validation and mixin name checks."""
import logging
import subprocess
from unittest.mock import Mock, patch

import pytest

from skeletor.models.errors import InvalidNameError
from skeletor.scaffold.validation import PostGenerationValidator, validate_mixin_name


class TestPostGenerationValidator:
    """Test toolchain validation of generated projects."""

    @patch('subprocess.run')
    def test_all_commands_pass(self, mock_run, console, read_console, tmp_path):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")
        results = PostGenerationValidator(console).validate(tmp_path)

        assert [c[0][0] for c in mock_run.call_args_list] == [
            ["go", "mod", "tidy"],
            ["go", "build", "./..."],
            ["go", "test", "./..."],
        ]
        assert all(r.ok for r in results)
        output = read_console(console)
        assert "Running post-generation validation..." in output
        assert "  - go build ./...: OK" in output
        assert output.rstrip().endswith("Validation complete.")

    @patch('subprocess.run')
    def test_failures_only_warn(self, mock_run, console, read_console, tmp_path, caplog):
        def fake_run(cmd, **kwargs):
            if cmd[1] == "build":
                raise subprocess.CalledProcessError(1, cmd, stderr="undefined: Foo")
            return Mock(returncode=0, stdout="", stderr="")

        mock_run.side_effect = fake_run
        with caplog.at_level(logging.WARNING):
            results = PostGenerationValidator(console).validate(tmp_path)

        assert [r.ok for r in results] == [True, False, True]
        assert results[1].detail == "undefined: Foo"
        assert "'go build ./...' failed: undefined: Foo" in caplog.text
        assert "  - go test ./...: OK" in read_console(console)

    @patch('subprocess.run')
    def test_missing_toolchain(self, mock_run, console, tmp_path):
        mock_run.side_effect = FileNotFoundError("go")
        results = PostGenerationValidator(console).validate(tmp_path)
        assert not any(r.ok for r in results)
        assert results[0].detail == "go not found"

    def test_describe(self, console):
        validator = PostGenerationValidator(console, commands=[("go", "vet", "./...")])
        assert validator.describe() == ["go vet ./..."]


class TestValidateMixinName:
    @pytest.mark.parametrize("name", ["demo", "helm3", "my-mixin", "a"])
    def test_valid_names(self, name):
        validate_mixin_name(name)

    @pytest.mark.parametrize("name", ["", "Demo", "3d", "-x", "my_mixin", "my mixin"])
    def test_malformed_names(self, name):
        with pytest.raises(InvalidNameError):
            validate_mixin_name(name)

    @pytest.mark.parametrize("name", ["porter", "mixin", "install", "version"])
    def test_reserved_names(self, name):
        with pytest.raises(InvalidNameError) as exc:
            validate_mixin_name(name)
        assert "reserved" in str(exc.value)
