"""CLI tests for the run and tokens commands."""

import pytest
import json
from click.testing import CliRunner

from basiceval.cli import main as cli_main


class TestRunCommand:
    """Tests for the run CLI command."""

    @pytest.fixture
    def runner(self):
        """CLI runner."""
        return CliRunner()

    @pytest.fixture
    def program_path(self, tmp_path):
        """Create a temporary program file."""
        path = tmp_path / "hello.bas"
        path.write_text(
            '10 FOR i = 1 TO 3\n'
            '20 PRINT i; " "\n'
            '30 NEXT i\n'
            '40 PRINT "done\\n"\n'
        )
        return str(path)

    def test_run_missing_program(self, runner):
        """Test run with missing program argument."""
        result = runner.invoke(cli_main, ["run"])
        assert result.exit_code != 0

    def test_run_program_not_found(self, runner):
        """Test run with non-existent program file."""
        result = runner.invoke(cli_main, ["run", "/nonexistent/program.bas"])
        assert result.exit_code != 0

    def test_run_program(self, runner, program_path):
        """Test a program runs and prints to stdout."""
        result = runner.invoke(cli_main, ["run", program_path])
        assert result.exit_code == 0
        assert "1 2 3 done" in result.output

    def test_run_json_output(self, runner, program_path):
        """Test the JSON summary captures program output."""
        result = runner.invoke(cli_main, ["run", program_path, "--json-output"])
        assert result.exit_code == 0
        output = json.loads(result.stdout)
        assert output["success"] is True
        assert output["output"] == "1 2 3 done\n"
        assert output["error"] is None

    def test_run_error_exit_code(self, runner, tmp_path):
        """Test a runtime error exits non-zero."""
        path = tmp_path / "bad.bas"
        path.write_text("10 GOTO 99\n")
        result = runner.invoke(cli_main, ["run", str(path)])
        assert result.exit_code == 1

    def test_run_error_json(self, runner, tmp_path):
        """Test the JSON summary of a failed run."""
        path = tmp_path / "bad.bas"
        path.write_text("10 RETURN\n")
        result = runner.invoke(cli_main, ["run", str(path), "-j"])
        assert result.exit_code == 1
        output = json.loads(result.stdout)
        assert output["success"] is False
        assert output["error_type"] == "ControlError"

    def test_run_load_error(self, runner, tmp_path):
        """Test a DATA load error exits non-zero."""
        path = tmp_path / "data.bas"
        path.write_text("10 DATA LET\n")
        result = runner.invoke(cli_main, ["run", str(path)])
        assert result.exit_code == 1

    def test_run_max_steps(self, runner, tmp_path):
        """Test --max-steps stops a runaway program."""
        path = tmp_path / "loop.bas"
        path.write_text("10 GOTO 10\n")
        result = runner.invoke(cli_main, ["run", str(path), "--max-steps", "10"])
        assert result.exit_code == 1


class TestTokensCommand:
    """Tests for the tokens CLI command."""

    @pytest.fixture
    def runner(self):
        """CLI runner."""
        return CliRunner()

    def test_tokens(self, runner, tmp_path):
        """Test the token dump."""
        path = tmp_path / "t.bas"
        path.write_text('10 PRINT "hi"\n')
        result = runner.invoke(cli_main, ["tokens", str(path)])
        assert result.exit_code == 0
        assert "LINENO" in result.output
        assert "PRINT" in result.output
        assert "'hi'" in result.output

    def test_tokens_lex_error(self, runner, tmp_path):
        """Test an unknown character fails."""
        path = tmp_path / "t.bas"
        path.write_text("10 PRINT @\n")
        result = runner.invoke(cli_main, ["tokens", str(path)])
        assert result.exit_code == 1
