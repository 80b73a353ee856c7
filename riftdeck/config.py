from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "RiftDeck"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/riftdeck"

    # JSON list of catalog records used by the import_cards job
    card_catalog_path: str = "data/cards.json"

    # Deck construction rules, read once at startup.
    # Defaults are the Riftbound constructed format; legend count is fixed at 1.
    main_deck_min: int = 30
    main_deck_max: int = 40
    rune_deck_min: int = 10
    rune_deck_max: int = 12
    battlefield_count: int = 1
    max_copies_per_card: int = 3
    domains_per_legend: int = 2


settings = Settings()
