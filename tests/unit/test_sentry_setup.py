from types import SimpleNamespace

from src.core_shared.sentry_sdk_setup import build_sentry_options, setup_sentry


def make_settings(dsn: str | None, production: bool) -> SimpleNamespace:
    return SimpleNamespace(SENTRY_DSN=dsn, PRODUCTION=production, PROJECT_NAME="HabitQuest API", API_VERSION="0.1.0")


def test_no_dsn_disables_sentry():
    settings = make_settings(None, production=True)

    assert build_sentry_options(settings) is None
    assert setup_sentry(settings) is False


def test_production_options():
    options = build_sentry_options(make_settings("https://key@sentry.example.com/1", production=True))

    assert options == {
        "dsn": "https://key@sentry.example.com/1",
        "environment": "production",
        "traces_sample_rate": 0.1,
        "profiles_sample_rate": 0.1,
        "release": "HabitQuest API@0.1.0",
    }


def test_development_samples_everything():
    options = build_sentry_options(make_settings("https://key@sentry.example.com/1", production=False))

    assert options is not None
    assert options["environment"] == "development"
    assert options["traces_sample_rate"] == 1.0
