import os

from dotenv import dotenv_values

from settings import envfile


def test_mirror_writes_only_known_keys(tmp_path):
    path = tmp_path / ".env"
    path.write_text("APP=1\n", encoding="utf-8")

    written = envfile.mirror_settings({"stripe_key": "pk_1", "site_name": "Ignored"}, path=path)

    assert written == ["STRIPE_PUBLISHABLE_KEY"]
    assert path.read_text(encoding="utf-8") == "APP=1\nSTRIPE_PUBLISHABLE_KEY='pk_1'\n"


def test_existing_lines_are_replaced_in_place(tmp_path):
    path = tmp_path / ".env"
    path.write_text(
        "# provider keys\nSTRIPE_SECRET_KEY=old\nDATABASE_URL=postgresql://x\n",
        encoding="utf-8",
    )

    envfile.mirror_settings({"stripe_secret": "sk_new", "paypal_email": "pay@x.io"}, path=path)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "# provider keys"
    assert lines[1] == "STRIPE_SECRET_KEY='sk_new'"
    assert lines[2] == "DATABASE_URL=postgresql://x"
    assert dotenv_values(path)["PAYPAL_EMAIL"] == "pay@x.io"


def test_duplicate_keys_are_all_rewritten(tmp_path):
    path = tmp_path / ".env"
    path.write_text("STRIPE_SECRET_KEY=old1\nSTRIPE_SECRET_KEY=old2\n", encoding="utf-8")

    envfile.mirror_settings({"stripe_secret": "sk_new"}, path=path)

    assert "old" not in path.read_text(encoding="utf-8")
    assert dotenv_values(path)["STRIPE_SECRET_KEY"] == "sk_new"


def test_values_are_read_back_literally(tmp_path):
    path = tmp_path / ".env"
    secret = "ab${HOME}cd #x y"

    envfile.mirror_settings({"paypal_secret": secret}, path=path)

    assert dotenv_values(path)["PAYPAL_SECRET"] == secret


def test_commented_keys_are_left_alone(tmp_path):
    path = tmp_path / ".env"
    path.write_text("#PAYPAL_SECRET=a\n", encoding="utf-8")

    envfile.mirror_settings({"paypal_secret": "b"}, path=path)

    assert path.read_text(encoding="utf-8").startswith("#PAYPAL_SECRET=a\n")
    assert dotenv_values(path)["PAYPAL_SECRET"] == "b"


def test_mirror_is_disabled_without_a_path(monkeypatch):
    monkeypatch.delenv("SETTINGS_ENV_FILE", raising=False)

    assert envfile.mirror_settings({"stripe_key": "pk_1"}) == []


def test_mirror_failure_is_swallowed(tmp_path):
    # A directory cannot be read as a dotenv file.
    assert envfile.mirror_settings({"stripe_key": "pk_1"}, path=tmp_path) == []


def test_process_environment_is_untouched(tmp_path, monkeypatch):
    monkeypatch.delenv("STRIPE_PUBLISHABLE_KEY", raising=False)

    envfile.mirror_settings({"stripe_key": "pk_1"}, path=tmp_path / ".env")

    assert "STRIPE_PUBLISHABLE_KEY" not in os.environ
