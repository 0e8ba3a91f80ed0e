"""Tests for pipeline configuration."""

from pathlib import Path

from spritekit.config import PipelineConfig, get_config, set_config


class TestPipelineConfig:
    """Tests for PipelineConfig."""

    def test_defaults(self, monkeypatch):
        for name in ("SPRITEKIT_KEY_COLOR", "SPRITEKIT_TOLERANCE", "SPRITEKIT_PASSES", "SPRITEKIT_PORT"):
            monkeypatch.delenv(name, raising=False)

        config = PipelineConfig()

        assert config.key_color == "#FF00FF"
        assert config.tolerance == 30
        assert config.passes == 4
        assert config.port == 3002
        assert config.validate() == []

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SPRITEKIT_KEY_COLOR", "#00FF00")
        monkeypatch.setenv("SPRITEKIT_TOLERANCE", "12")
        monkeypatch.setenv("SPRITEKIT_PASSES", "7")
        monkeypatch.setenv("SPRITEKIT_ASSETS_DIR", "/tmp/sprites")

        config = PipelineConfig.from_env()

        assert config.key_color == "#00FF00"
        assert config.tolerance == 12
        assert config.passes == 7
        assert config.assets_dir == Path("/tmp/sprites")

    def test_key_config(self):
        key = PipelineConfig(key_color="00FF00", tolerance=5).key_config()
        assert key.color == (0, 255, 0)
        assert key.tolerance == 5

    def test_validate_errors(self):
        config = PipelineConfig(key_color="#XYZ", tolerance=300, passes=9, max_workers=0)
        errors = config.validate()
        assert len(errors) == 4
        assert any("SPRITEKIT_PASSES" in error for error in errors)


class TestGlobalConfig:
    """Tests for the config singleton."""

    def test_set_and_reset(self, monkeypatch):
        custom = PipelineConfig(passes=2)
        set_config(custom)
        assert get_config() is custom

        monkeypatch.setenv("SPRITEKIT_PASSES", "5")
        set_config(None)
        try:
            assert get_config().passes == 5
        finally:
            set_config(None)
