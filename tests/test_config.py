"""Tests for configuration management."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from guesser.config import (
    AppConfig,
    LLMConfig,
    PolicyConfig,
    ServerConfig,
    load_config,
    save_config,
)


class TestLLMConfig:
    """Test LLM configuration."""

    def test_default_values(self):
        """Test default LLM config values."""
        config = LLMConfig()
        assert config.provider == "gemini"
        assert config.model is None
        assert config.temperature == 0.7
        assert config.top_k == 40
        assert config.top_p == 0.95
        assert config.max_tokens == 1024
        assert config.api_key_env is None
        assert config.base_url is None

    def test_default_safety_categories(self):
        """Test the four content-safety categories are configured."""
        config = LLMConfig()
        assert len(config.safety_categories) == 4
        assert "HARM_CATEGORY_HARASSMENT" in config.safety_categories
        assert config.safety_threshold == "BLOCK_MEDIUM_AND_ABOVE"

    def test_connection_fields_unset_for_other_providers(self):
        """Test unset connection fields stay unset for other providers."""
        config = LLMConfig(provider="ollama", model="llama3")
        assert config.base_url is None
        assert config.api_key_env is None


class TestPolicyConfig:
    """Test guessing policy configuration."""

    def test_default_values(self):
        """Test default policy values."""
        config = PolicyConfig()
        assert config.min_questions == 20
        assert config.confidence_threshold == 0.98

    def test_threshold_must_be_fraction(self):
        """Test threshold outside [0, 1] is rejected."""
        with pytest.raises(ValidationError):
            PolicyConfig(confidence_threshold=98)

    def test_negative_min_questions_rejected(self):
        """Test min_questions must be non-negative."""
        with pytest.raises(ValidationError):
            PolicyConfig(min_questions=-1)


class TestAppConfig:
    """Test main application configuration."""

    def test_default_config(self):
        """Test default app config creation."""
        config = AppConfig()
        assert isinstance(config.llm, LLMConfig)
        assert isinstance(config.policy, PolicyConfig)
        assert isinstance(config.server, ServerConfig)
        assert config.server.port == 8000


class TestConfigFileOperations:
    """Test config file save/load operations."""

    def test_save_and_load_config(self):
        """Test saving and loading configuration."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "test_config.yaml"

            config = AppConfig(
                llm=LLMConfig(model="gemini-1.5-pro", temperature=0.2),
                policy=PolicyConfig(min_questions=10, confidence_threshold=0.9),
            )
            save_config(config, config_path)
            assert config_path.exists()

            loaded = load_config(config_path)
            assert loaded.llm.model == "gemini-1.5-pro"
            assert loaded.llm.temperature == 0.2
            assert loaded.policy.min_questions == 10
            assert loaded.policy.confidence_threshold == 0.9

    def test_api_key_not_saved(self):
        """Test the API key never reaches the config file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "test.yaml"
            save_config(AppConfig(llm=LLMConfig(api_key="secret-key")), config_path)

            content = config_path.read_text()
            assert "secret-key" not in content
            assert load_config(config_path).llm.api_key is None

    def test_load_nonexistent_config(self):
        """Test loading returns defaults when file doesn't exist."""
        config = load_config(Path("/nonexistent/path/config.yaml"))
        assert config.llm.provider == "gemini"
        assert config.policy.min_questions == 20

    def test_partial_yaml(self):
        """Test a partial file only overrides the keys it names."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "partial.yaml"
            config_path.write_text("policy:\n  min_questions: 5\n")

            config = load_config(config_path)
            assert config.policy.min_questions == 5
            assert config.policy.confidence_threshold == 0.98
            assert config.llm.model is None
            assert config.llm.provider == "gemini"

    def test_config_yaml_format(self):
        """Test that saved config is valid YAML."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "test.yaml"
            save_config(AppConfig(), config_path)

            content = config_path.read_text()
            assert "llm:" in content
            assert "policy:" in content
            assert "min_questions: 20" in content
