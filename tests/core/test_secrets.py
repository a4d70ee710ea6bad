"""Tests for stash.core.secrets."""

import os

from stash.core.secrets import EnvProvider, KeyringProvider, SecretsManager, YamlFileProvider, build_secrets


class _FakeKeyring:
    def __init__(self, store=None, error=None):
        self.store = dict(store or {})
        self.error = error
        self.calls = []

    def get_password(self, service, account):
        self.calls.append((service, account))
        if self.error:
            raise self.error
        return self.store.get((service, account))


class _StaticProvider:
    def __init__(self, values):
        self.values = values

    def get(self, key_path):
        return self.values.get(key_path)


class TestEnvProvider:
    def test_bare_name(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "g-123")
        assert EnvProvider("").get("google_api_key") == "g-123"

    def test_prefixed_nested(self, monkeypatch):
        monkeypatch.setenv("MYAPP_AI__OPENAI_API_KEY", "abc")
        assert EnvProvider(prefix="MYAPP_").get("ai.openai_api_key") == "abc"

    def test_missing(self):
        assert EnvProvider(prefix="NONEXISTENT_").get("foo.bar") is None


class TestKeyringProvider:
    def test_get(self):
        provider = KeyringProvider("svc")
        provider._backend = _FakeKeyring({("svc", "anthropic_api_key"): "sk-ant"})
        assert provider.get("anthropic_api_key") == "sk-ant"
        assert provider._backend.calls == [("svc", "anthropic_api_key")]

    def test_missing_item(self):
        provider = KeyringProvider("svc")
        provider._backend = _FakeKeyring()
        assert provider.get("google_api_key") is None

    def test_backend_error_is_none(self):
        provider = KeyringProvider("svc")
        provider._backend = _FakeKeyring(error=RuntimeError("no backend available"))
        assert provider.get("google_api_key") is None


class TestSecretsManager:
    def test_first_provider_wins(self):
        manager = SecretsManager([_StaticProvider({"k": "first"}), _StaticProvider({"k": "second"})])
        assert manager.get("k") == "first"

    def test_empty_value_falls_through(self):
        manager = SecretsManager([_StaticProvider({"k": ""}), _StaticProvider({"k": "second"})])
        assert manager.get("k") == "second"

    def test_default(self):
        manager = SecretsManager([_StaticProvider({})])
        assert manager.get("k", "dflt") == "dflt"


class TestYamlFileProvider:
    def test_flat_and_nested(self, tmp_dir):
        path = os.path.join(tmp_dir, "secrets.yaml")
        with open(path, "w") as f:
            f.write("google_api_key: g-file\nai:\n  openai_api_key: o-file\n")
        provider = YamlFileProvider(path)
        assert provider.get("google_api_key") == "g-file"
        assert provider.get("ai.openai_api_key") == "o-file"
        assert provider.get("ai.missing") is None

    def test_missing_file(self, tmp_dir):
        assert YamlFileProvider(os.path.join(tmp_dir, "nope.yaml")).get("google_api_key") is None

    def test_unparseable_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "secrets.yaml")
        with open(path, "w") as f:
            f.write("key: [unclosed\n")
        assert YamlFileProvider(path).get("key") is None

    def test_read_once(self, tmp_dir):
        path = os.path.join(tmp_dir, "secrets.yaml")
        with open(path, "w") as f:
            f.write("k: one\n")
        provider = YamlFileProvider(path)
        assert provider.get("k") == "one"
        with open(path, "w") as f:
            f.write("k: two\n")
        assert provider.get("k") == "one"


class TestBuildSecrets:
    def test_keyring_before_env(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "from-env")
        manager = build_secrets("svc")
        keyring_provider = manager._providers[0]
        assert isinstance(keyring_provider, KeyringProvider)
        keyring_provider._backend = _FakeKeyring({("svc", "google_api_key"): "from-keychain"})
        assert manager.get("google_api_key") == "from-keychain"

    def test_env_when_keyring_empty(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")
        manager = build_secrets("svc")
        manager._providers[0]._backend = _FakeKeyring()
        assert manager.get("openai_api_key") == "from-env"

    def test_nothing_resolvable(self):
        manager = build_secrets("svc")
        manager._providers[0]._backend = _FakeKeyring()
        assert manager.get("anthropic_api_key") is None

    def test_secrets_file_consulted_last(self, tmp_dir, monkeypatch):
        path = os.path.join(tmp_dir, "secrets.yaml")
        with open(path, "w") as f:
            f.write("anthropic_api_key: from-file\ngoogle_api_key: file-google\n")
        monkeypatch.setenv("GOOGLE_API_KEY", "from-env")
        manager = build_secrets("svc", path)
        manager._providers[0]._backend = _FakeKeyring()
        assert isinstance(manager._providers[-1], YamlFileProvider)
        assert manager.get("anthropic_api_key") == "from-file"
        assert manager.get("google_api_key") == "from-env"
