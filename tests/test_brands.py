"""Tests for the static brand table."""

import pytest
from pydantic import ValidationError

from presswire.brands import (
    _PROFILES,
    BRANDS,
    DEFAULT_VOICE_BRAND,
    Brand,
    get_brand,
    voice_for,
)


class TestBrandTable:
    def test_every_brand_has_a_profile(self):
        assert set(BRANDS) == set(Brand)

    def test_base_url_uses_domain(self):
        assert get_brand(Brand.TRAPGLOW).base_url == "https://trapglow.com"

    def test_lookup_by_string(self):
        assert get_brand("saucecaviar").name == "SauceCaviar"

    def test_unknown_brand_raises(self):
        with pytest.raises(ValueError):
            get_brand("not-a-brand")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            BRANDS[Brand.SAUCEWIRE] = BRANDS[Brand.TRAPGLOW]  # type: ignore[index]

    def test_profiles_are_frozen(self):
        with pytest.raises(ValidationError):
            get_brand(Brand.SAUCEWIRE).name = "Other"  # type: ignore[misc]


class TestVoices:
    @pytest.mark.parametrize(
        ("brand", "voice_name"),
        [
            (Brand.SAUCEWIRE, "Lily"),
            (Brand.SAUCECAVIAR, "Daniel"),
            (Brand.TRAPGLOW, "Sarah"),
            (Brand.TRAPFREQUENCY, "Callum"),
        ],
    )
    def test_brand_voice(self, brand: Brand, voice_name: str):
        assert voice_for(brand).voice_name == voice_name

    def test_saucewire_voice_id(self):
        assert voice_for("saucewire").voice_id == "pFZP5JQG7iQjIQuC4Bku"

    def test_missing_voice_falls_back_to_default_brand(self, monkeypatch: pytest.MonkeyPatch):
        profile = BRANDS[Brand.TRAPGLOW].model_copy(update={"voice": None})
        monkeypatch.setitem(_PROFILES, Brand.TRAPGLOW, profile)
        assert voice_for(Brand.TRAPGLOW) == BRANDS[DEFAULT_VOICE_BRAND].voice

    def test_no_voice_anywhere_raises(self, monkeypatch: pytest.MonkeyPatch):
        for brand in (Brand.TRAPGLOW, DEFAULT_VOICE_BRAND):
            profile = BRANDS[brand].model_copy(update={"voice": None})
            monkeypatch.setitem(_PROFILES, brand, profile)
        with pytest.raises(ValueError, match="No synthesis voice"):
            voice_for(Brand.TRAPGLOW)
