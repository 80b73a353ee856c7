"""Smoke test for application startup."""


def test_app_imports() -> None:
    """Verify the app can be imported without errors."""
    from riftdeck.main import app

    assert app.title == "RiftDeck"


def test_routes_registered() -> None:
    from riftdeck.main import app

    paths = set(app.openapi()["paths"])
    assert {"/health", "/ready", "/decks", "/decks/{deck_id}/validate"} <= paths
