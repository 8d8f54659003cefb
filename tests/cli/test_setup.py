from click.testing import CliRunner
from softicar_samba.cli import main

def test_main_help():
    runner = CliRunner()
    result = runner.invoke(main, ['--help'])
    assert result.exit_code == 0
    assert "SoftiCAR Samba file store administration" in result.output

def test_setup_help():
    runner = CliRunner()
    result = runner.invoke(main, ['setup', '--help'])
    assert result.exit_code == 0
    assert "Install Samba and configure the SoftiCAR file share." in result.output

def test_version():
    runner = CliRunner()
    result = runner.invoke(main, ['--version'])
    assert result.exit_code == 0
    assert "softicar-samba" in result.output

def test_bad_config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("colour: blue\n")
    runner = CliRunner()
    result = runner.invoke(main, ['--config', str(path), 'setup', '--help'])
    assert result.exit_code == 2
    assert "Unknown configuration keys: colour" in result.output

def test_bad_log_level_from_config(tmp_path):
    from unittest.mock import patch
    from softicar_samba.config.settings import config

    path = tmp_path / "config.yaml"
    path.write_text("log_level: verbose\n")
    runner = CliRunner()
    with patch.object(config, "log_level", config.log_level):
        result = runner.invoke(main, ['--config', str(path), 'setup', '--help'])
    assert result.exit_code == 2
    assert "Unknown log level: VERBOSE" in result.output

def test_bad_log_level_from_environment():
    from unittest.mock import patch
    from softicar_samba.config.settings import config

    runner = CliRunner()
    with patch.object(config, "log_level", "loud"):
        result = runner.invoke(main, ['setup', '--help'])
    assert result.exit_code == 2
    assert "Unknown log level: LOUD" in result.output
