from app.core.config import Settings


def test_environment_selects_production_mode():
    assert Settings(environment="production").is_production
    assert Settings(environment="Production").is_production
    assert not Settings(environment="development").is_production
