"""Static brand table for the network properties.

One immutable profile per brand, loaded once at import: display name,
canonical domain, newsletter styling and the synthesis voice.  Dispatchers
receive profiles from here instead of keeping their own literal maps.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict


class Brand(StrEnum):
    """Network properties sharing the content store."""

    SAUCEWIRE = "saucewire"
    SAUCECAVIAR = "saucecaviar"
    TRAPGLOW = "trapglow"
    TRAPFREQUENCY = "trapfrequency"


class VoiceProfile(BaseModel):
    """Speech synthesis voice used for a brand's audio versions."""

    model_config = ConfigDict(frozen=True)

    voice_id: str
    voice_name: str


class EmailStyle(BaseModel):
    """Colours and header treatment for a brand's newsletter."""

    model_config = ConfigDict(frozen=True)

    primary_color: str
    bg_color: str
    text_color: str
    header_style: str
    logo: str


class BrandProfile(BaseModel):
    """Everything the fan-out needs to know about one brand."""

    model_config = ConfigDict(frozen=True)

    brand: Brand
    name: str
    tagline: str
    domain: str
    email: EmailStyle
    voice: VoiceProfile | None = None

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}"


DEFAULT_VOICE_BRAND = Brand.SAUCEWIRE

_PROFILES: dict[Brand, BrandProfile] = {
    Brand.SAUCEWIRE: BrandProfile(
        brand=Brand.SAUCEWIRE,
        name="SauceWire",
        tagline="Culture. Connected. Now.",
        domain="saucewire.com",
        email=EmailStyle(
            primary_color="#E63946",
            bg_color="#111111",
            text_color="#FFFFFF",
            header_style="font-weight: 900; text-transform: uppercase; letter-spacing: 2px;",
            logo="\U0001f4e1",
        ),
        voice=VoiceProfile(voice_id="pFZP5JQG7iQjIQuC4Bku", voice_name="Lily"),
    ),
    Brand.SAUCECAVIAR: BrandProfile(
        brand=Brand.SAUCECAVIAR,
        name="SauceCaviar",
        tagline="Culture Served Premium",
        domain="saucecaviar.com",
        email=EmailStyle(
            primary_color="#C9A84C",
            bg_color="#0A0A0A",
            text_color="#FAFAF7",
            header_style="font-weight: 300; font-style: italic; letter-spacing: 4px;",
            logo="\U0001f942",
        ),
        voice=VoiceProfile(voice_id="onwK4e9ZLuTAKqWW03F9", voice_name="Daniel"),
    ),
    Brand.TRAPGLOW: BrandProfile(
        brand=Brand.TRAPGLOW,
        name="TrapGlow",
        tagline="Shining Light on What's Next",
        domain="trapglow.com",
        email=EmailStyle(
            primary_color="#8B5CF6",
            bg_color="#0F0B2E",
            text_color="#F8F8FF",
            header_style="font-weight: 700; text-shadow: 0 0 20px #8B5CF6;",
            logo="✨",
        ),
        voice=VoiceProfile(voice_id="EXAVITQu4vr4xnSDxMaL", voice_name="Sarah"),
    ),
    Brand.TRAPFREQUENCY: BrandProfile(
        brand=Brand.TRAPFREQUENCY,
        name="TrapFrequency",
        tagline="Tune Into The Craft",
        domain="trapfrequency.com",
        email=EmailStyle(
            primary_color="#39FF14",
            bg_color="#0D0D0D",
            text_color="#E0E0E0",
            header_style="font-weight: 600; font-family: monospace; letter-spacing: 1px;",
            logo="\U0001f39b️",
        ),
        voice=VoiceProfile(voice_id="N2lVS1w4EtoT3dr4eOWO", voice_name="Callum"),
    ),
}

BRANDS = MappingProxyType(_PROFILES)


def get_brand(brand: Brand | str) -> BrandProfile:
    """Return the profile for a brand.

    Raises:
        ValueError: If the brand is not part of the network.
    """
    return BRANDS[Brand(brand)]


def voice_for(brand: Brand | str) -> VoiceProfile:
    """Return the synthesis voice for a brand, falling back to the default brand's."""
    voice = get_brand(brand).voice or BRANDS[DEFAULT_VOICE_BRAND].voice
    if voice is None:
        raise ValueError(f"No synthesis voice for {brand}")
    return voice
