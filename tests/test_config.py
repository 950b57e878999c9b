import logging

from exec_report.config import LoggerConfig, ReportSettings, configure_logging
from exec_report.fonts import DEFAULT_FONTS, register_fonts


def test_settings_defaults():
    settings = ReportSettings.from_env({})
    assert settings.font_dir is None
    assert settings.default_report_version == 'v1'
    assert settings.file_extension == 'pdf'
    assert settings.log_level == logging.INFO


def test_settings_from_env():
    settings = ReportSettings.from_env({
        'EXEC_REPORT_FONT_DIR': '/opt/fonts',
        'EXEC_REPORT_VERSION': 'v4',
        'EXEC_REPORT_LOG_LEVEL': 'debug',
    })
    assert settings.font_dir == '/opt/fonts'
    assert settings.default_report_version == 'v4'
    assert settings.log_level == logging.DEBUG


def test_settings_ignore_unknown_log_level():
    assert ReportSettings.from_env({'EXEC_REPORT_LOG_LEVEL': 'chatty'}).log_level == logging.INFO


def test_configure_logging_is_idempotent(tmp_path):
    log_file = tmp_path / 'logs' / 'report.log'
    config = LoggerConfig(name='exec_report.test', level=logging.DEBUG, log_file=str(log_file))
    logger = configure_logging(config)
    configure_logging(config)
    try:
        assert len(logger.handlers) == 1
        logger.info('rendered')
        logger.handlers[0].flush()
        assert 'rendered' in log_file.read_text(encoding='utf-8')
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_missing_font_dir_falls_back_to_helvetica(tmp_path):
    assert register_fonts(None) == DEFAULT_FONTS
    assert register_fonts(str(tmp_path)) == DEFAULT_FONTS
