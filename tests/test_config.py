"""
Tests for environment-driven settings
"""
from pathlib import Path

from finance_tracker.utils import config


def test_defaults(monkeypatch):
    monkeypatch.delenv('FINANCE_DATA_DIR', raising=False)
    monkeypatch.delenv('STORAGE_BACKEND', raising=False)
    monkeypatch.delenv('REVIEW_THRESHOLD', raising=False)

    assert config.get_data_dir() == Path.home() / '.finance_tracker'
    assert config.get_storage_backend() == 'json'
    assert config.get_review_threshold() == 0.80


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv('FINANCE_DATA_DIR', str(tmp_path))
    monkeypatch.setenv('STORAGE_BACKEND', ' Postgres ')
    monkeypatch.setenv('REVIEW_THRESHOLD', '0.65')

    assert config.get_data_dir() == tmp_path
    assert config.get_storage_backend() == 'postgres'
    assert config.get_review_threshold() == 0.65


def test_invalid_threshold_falls_back(monkeypatch, capsys):
    monkeypatch.setenv('REVIEW_THRESHOLD', 'high')
    assert config.get_review_threshold() == 0.80
    assert 'Invalid REVIEW_THRESHOLD' in capsys.readouterr().out
