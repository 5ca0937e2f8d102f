"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from config import Config, load_config


class TestConfig:
    
    def test_defaults(self):
        config = Config(_env_file=None)
        
        assert config.short_code_length == 8
        assert config.max_collision_retries == 5
        assert config.cache_ttl_seconds == 3600
        assert config.code_strategy == "random"
    
    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")
        monkeypatch.setenv("SHORT_CODE_LENGTH", "6")
        monkeypatch.setenv("MAX_COLLISION_RETRIES", "3")
        monkeypatch.setenv("CREATE_TABLES", "true")
        
        config = load_config()
        
        assert config.redis_url == "redis://cache:6379/1"
        assert config.short_code_length == 6
        assert config.max_collision_retries == 3
        assert config.create_tables is True
    
    @pytest.mark.parametrize("field, value", [
        ("short_code_length", 9),
        ("short_code_length", 0),
        ("max_collision_retries", 0),
        ("code_strategy", "sequential"),
    ])
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Config(_env_file=None, **{field: value})
