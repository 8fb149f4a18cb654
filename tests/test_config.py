from studyaid.core.config import GeminiSettings, settings


def test_key_list_preserves_order():
    cfg = GeminiSettings(GEMINI_API_KEYS="first,second,third")
    assert cfg.api_keys == ["first", "second", "third"]


def test_single_key_fallback():
    cfg = GeminiSettings(GEMINI_API_KEYS="", GEMINI_API_KEY=" solo ")
    assert cfg.api_keys == ["solo"]


def test_generation_defaults():
    cfg = GeminiSettings(GEMINI_API_KEYS="k")
    assert cfg.primary_model == "gemini-2.5-flash"
    assert cfg.fallback_model == "gemini-pro"
    assert cfg.max_attempts == 5
    assert cfg.max_prompt_chars == 30000


def test_test_mode_loaded():
    assert settings.app.is_testing is True
    assert settings.app.max_upload_bytes == 5 * 1024 * 1024
