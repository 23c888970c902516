from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validator settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="BOOSTERCHECK_")

    app_name: str = "boostercheck"

    # Repository root holding boosters/ and index.json
    data_dir: Path = Path(".")

    scryfall_api: str = "https://api.scryfall.com"
    user_agent: str = "boostercheck/1.0"

    # Scryfall asks for 50-100ms between requests
    request_delay: float = 0.1
    retry_attempts: int = 3
    retry_delay: float = 1.0

    url_timeout: float = 10.0
    api_timeout: float = 30.0

    # Missing collector numbers inside this window are assumed to be basic lands
    basic_land_min: int = 250
    basic_land_max: int = 320

    @property
    def boosters_dir(self) -> Path:
        return self.data_dir / "boosters"

    @property
    def index_path(self) -> Path:
        return self.data_dir / "index.json"

    @property
    def audit_output_path(self) -> Path:
        return self.data_dir / "audit-results.json"


settings = Settings()


# =============================================================================
# STATIC BOOSTER DATA
# =============================================================================

VALID_RARITIES = frozenset({"common", "uncommon", "rare", "mythic", "special", "bonus"})

# Limited-pool booster types, in the order used to pair with a collector booster
LIMITED_BOOSTER_TYPES = ("draft", "play", "set")

KNOWN_BOOSTER_TYPES = ("draft", "play", "collector", "jumpstart", "set")

# Sets released after collector boosters were introduced (Throne of Eldraine onward)
COLLECTOR_ERA_SETS = (
    "eld", "thb", "iko", "m21", "znr", "khm", "stx", "afr", "mid", "vow",
    "neo", "snc", "dmu", "bro", "one", "mom", "woe", "lci", "mkm", "otj",
    "mh3", "blb", "dsk", "fdn", "acr", "dft", "tdm", "fin", "inr", "tla",
    "eoe", "spm", "ecl", "ltr", "mh2",
)  # fmt: skip
