"""
Tests for settings loading, overrides and validation.
"""

import json

import pytest

from response_scraper.scraper.config import ScraperConfig


def write_settings(path, payload):
    path.write_text(json.dumps(payload), encoding='utf-8')
    return str(path)


def test_defaults_without_settings_file(config):
    assert config['server']['port'] == 3000
    assert config['extraction']['max_blocks'] == 300
    assert config['diagnostics'] == {'max_blocks': 60, 'snippet_length': 15000}
    assert config['scraper']['wait_states'] == ['networkidle', 'domcontentloaded']
    assert all(config.validate_settings().values())


def test_file_is_deep_merged_over_defaults(tmp_path):
    settings_file = write_settings(tmp_path / 'settings.json', {
        'server': {'port': 8080},
        'extraction': {'max_blocks': 10}
    })
    config = ScraperConfig(settings_file, environ={})

    assert config['server'] == {'host': '0.0.0.0', 'port': 8080}
    assert config['extraction']['max_blocks'] == 10
    assert config['extraction']['short_block_length'] == 800


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ScraperConfig(str(tmp_path / 'nope.json'), environ={})


def test_invalid_json_raises(tmp_path):
    broken = tmp_path / 'broken.json'
    broken.write_text('{"server": ', encoding='utf-8')
    with pytest.raises(json.JSONDecodeError):
        ScraperConfig(str(broken), environ={})


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = ScraperConfig(environ={'PORT': '9000', 'HOST': '127.0.0.1', 'LOG_LEVEL': 'debug', 'HEADLESS': 'false'})

    assert config['server'] == {'host': '127.0.0.1', 'port': 9000}
    assert config['logging']['level'] == 'DEBUG'
    assert config['scraper']['headless'] is False


def test_override_ignores_none(config):
    config.override('server', 'port', None)
    assert config['server']['port'] == 3000
    config.override('server', 'port', 4000)
    assert config['server']['port'] == 4000


def test_defaults_are_not_shared_between_instances(config, tmp_path):
    config['extraction']['block_selectors'].append('span')
    assert 'span' not in ScraperConfig(environ={})['extraction']['block_selectors']


@pytest.mark.parametrize("section, key, value", [
    ('scraper', 'concurrency', 0),
    ('scraper', 'wait_states', []),
    ('scraper', 'user_agents', []),
    ('extraction', 'block_selectors', []),
    ('extraction', 'max_blocks', 0),
    ('diagnostics', 'snippet_length', -1),
    ('server', 'port', 70000),
])
def test_validation_flags_bad_section(config, section, key, value):
    config.override(section, key, value)
    results = config.validate_settings()
    assert results[section] is False
    assert all(ok for name, ok in results.items() if name != section)
