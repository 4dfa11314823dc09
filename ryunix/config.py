from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Ryunix Format"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/ryunix"

    card_directory_url: str = "https://db.ygoprodeck.com/api/v7/cardinfo.php"
    card_directory_timeout: float = 20.0

    # Quiet period before overlay edits are written to the store
    persist_debounce_seconds: float = 0.5

    # Optional catalog rewrite endpoint; empty disables the side-channel call
    catalog_update_url: str = ""

    broadcast_channel: str = "ryunix-card-mods"

    starting_coins: int = 0


settings = Settings()


# =============================================================================
# CATALOG AND GACHA LIMITS
# =============================================================================

# Max cards kept for one resolved archetype
ARCHETYPE_POOL_LIMIT = 200

# Default page size for catalog listings
CATALOG_PAGE_SIZE = 24

# A pack is 9 pulls, a box is 24 packs
SINGLE_PACK_PULLS = 9
BOX_PULLS = 216
