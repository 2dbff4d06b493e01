"""
Tests for API key resolution.
"""

import io

import pytest

from stormpath.api_keys import (
    ApiKey,
    ApiKeyBuilder,
    write_api_key_file,
    API_KEY_ID_ENV_VAR,
    API_KEY_SECRET_ENV_VAR,
)
from stormpath.api_keys.properties import write_properties_file
from stormpath.config import system_properties
from stormpath.config.settings import SdkConfig, ApiKeyConfig
from stormpath.exceptions import ConfigurationError, MissingCredentialError


def _write(path, id=None, secret=None, id_name="apiKey.id", secret_name="apiKey.secret"):
    props = {}
    if id is not None:
        props[id_name] = id
    if secret is not None:
        props[secret_name] = secret
    write_properties_file(props, path)
    return str(path)


class TestApiKey:
    """Tests for the ApiKey model."""

    def test_blank_values_rejected(self):
        with pytest.raises(ValueError):
            ApiKey(id="  ", secret="xyz")
        with pytest.raises(ValueError):
            ApiKey(id="abc", secret="")

    def test_repr_masks_secret(self):
        key = ApiKey(id="abc", secret="supersecretvalue")
        assert "supersecretvalue" not in repr(key)
        assert key.masked_secret.endswith("alue")

    def test_short_secret_fully_masked(self):
        assert ApiKey(id="abc", secret="short").masked_secret == "********"

    def test_immutable(self):
        key = ApiKey(id="abc", secret="xyz")
        with pytest.raises(AttributeError):
            key.id = "other"


class TestMissingCredentials:
    """Tests for failing resolution."""

    def test_nothing_configured(self, isolated_builder, missing_default_file):
        with pytest.raises(MissingCredentialError) as exc_info:
            isolated_builder().build()

        message = str(exc_info.value)
        assert exc_info.value.field == "id"
        assert API_KEY_ID_ENV_VAR in message
        assert API_KEY_SECRET_ENV_VAR in message
        assert "stormpath.apiKey.id" in message
        assert "stormpath.apiKey.secret" in message
        assert missing_default_file in message

    def test_missing_id_only_lists_id_locations(self, isolated_builder):
        builder = isolated_builder(environ={API_KEY_SECRET_ENV_VAR: "xyz"})
        with pytest.raises(MissingCredentialError) as exc_info:
            builder.build()

        assert exc_info.value.field == "id"
        assert API_KEY_SECRET_ENV_VAR not in str(exc_info.value)

    def test_missing_secret_only(self, isolated_builder, missing_default_file):
        builder = isolated_builder(environ={API_KEY_ID_ENV_VAR: "abc"})
        with pytest.raises(MissingCredentialError) as exc_info:
            builder.build()

        assert exc_info.value.field == "secret"
        assert API_KEY_SECRET_ENV_VAR in str(exc_info.value)
        assert missing_default_file in exc_info.value.locations[-1]

    def test_missing_credential_is_configuration_error(self, isolated_builder):
        with pytest.raises(ConfigurationError):
            isolated_builder().build()

    def test_whitespace_only_is_absent(self, isolated_builder):
        builder = isolated_builder(
            environ={API_KEY_ID_ENV_VAR: "   ", API_KEY_SECRET_ENV_VAR: "\t"},
        ).set_properties({"apiKey.id": "  ", "apiKey.secret": ""})
        with pytest.raises(MissingCredentialError):
            builder.build()


class TestPrecedence:
    """Tests for the source precedence chain."""

    def test_environment_only(self, isolated_builder):
        builder = isolated_builder(environ={
            API_KEY_ID_ENV_VAR: "abc",
            API_KEY_SECRET_ENV_VAR: "xyz",
        })
        assert builder.build() == ApiKey(id="abc", secret="xyz")

    def test_real_process_environment(self, monkeypatch, missing_default_file):
        from stormpath.api_keys import ApiKeySettings

        monkeypatch.setenv(API_KEY_ID_ENV_VAR, "envId")
        monkeypatch.setenv(API_KEY_SECRET_ENV_VAR, "envSecret")
        builder = ApiKeyBuilder(ApiKeySettings(default_file_location=missing_default_file))

        assert builder.build() == ApiKey(id="envId", secret="envSecret")

    def test_environment_overrides_default_file(self, isolated_builder, tmp_path):
        default_file = _write(tmp_path / "default.properties", "fileId", "fileSecret")
        builder = isolated_builder(
            environ={API_KEY_ID_ENV_VAR: "envId"},
            default_file=default_file,
        )

        assert builder.build() == ApiKey(id="envId", secret="fileSecret")

    def test_none_properties_are_ignored(self, isolated_builder):
        builder = isolated_builder(environ={
            API_KEY_ID_ENV_VAR: "abc",
            API_KEY_SECRET_ENV_VAR: "xyz",
        }).set_properties(None)

        assert builder.settings.properties is None
        assert builder.build() == ApiKey(id="abc", secret="xyz")

    def test_system_property_overrides_default_file_id_only(self, isolated_builder, tmp_path):
        default_file = _write(tmp_path / "default.properties", "fileId", "fileSecret")
        system_properties.set_property("stormpath.apiKey.id", "sysId")

        # Uses the process-wide system properties when none are injected
        from stormpath.api_keys import ApiKeySettings
        builder = ApiKeyBuilder(ApiKeySettings(environ={}, default_file_location=default_file))

        assert builder.build() == ApiKey(id="sysId", secret="fileSecret")

    def test_system_properties_override_environment(self, isolated_builder):
        builder = isolated_builder(
            environ={API_KEY_ID_ENV_VAR: "envId", API_KEY_SECRET_ENV_VAR: "envSecret"},
            system={"stormpath.apiKey.secret": "sysSecret"},
        )
        assert builder.build() == ApiKey(id="envId", secret="sysSecret")

    def test_file_location_overrides_system_properties(self, isolated_builder, tmp_path):
        location = _write(tmp_path / "explicit.properties", secret="fileSecret")
        builder = isolated_builder(
            system={"stormpath.apiKey.id": "sysId", "stormpath.apiKey.secret": "sysSecret"},
        ).set_file_location(location)

        assert builder.build() == ApiKey(id="sysId", secret="fileSecret")

    def test_input_stream_overrides_file_location(self, isolated_builder, tmp_path):
        location = _write(tmp_path / "explicit.properties", "fileId", "fileSecret")
        builder = (
            isolated_builder()
            .set_file_location(location)
            .set_input_stream(io.BytesIO(b"apiKey.id=streamId\n"))
        )
        assert builder.build() == ApiKey(id="streamId", secret="fileSecret")

    def test_reader_overrides_input_stream(self, isolated_builder):
        builder = (
            isolated_builder()
            .set_input_stream(io.BytesIO(b"apiKey.id=streamId\napiKey.secret=streamSecret\n"))
            .set_reader(io.StringIO("apiKey.secret=readerSecret\n"))
        )
        assert builder.build() == ApiKey(id="streamId", secret="readerSecret")

    def test_properties_override_reader(self, isolated_builder):
        builder = (
            isolated_builder()
            .set_reader(io.StringIO("apiKey.id=readerId\napiKey.secret=readerSecret\n"))
            .set_properties({"apiKey.id": "propsId"})
        )
        assert builder.build() == ApiKey(id="propsId", secret="readerSecret")

    def test_explicit_values_always_win(self, isolated_builder, tmp_path):
        default_file = _write(tmp_path / "default.properties", "fileId", "fileSecret")
        builder = (
            isolated_builder(
                environ={API_KEY_ID_ENV_VAR: "envId", API_KEY_SECRET_ENV_VAR: "envSecret"},
                system={"stormpath.apiKey.id": "sysId", "stormpath.apiKey.secret": "sysSecret"},
                default_file=default_file,
            )
            .set_reader(io.StringIO("apiKey.id=readerId\napiKey.secret=readerSecret\n"))
            .set_properties({"apiKey.id": "propsId", "apiKey.secret": "propsSecret"})
            .set_id("explicitId")
            .set_secret("explicitSecret")
        )
        assert builder.build() == ApiKey(id="explicitId", secret="explicitSecret")

    def test_blank_explicit_value_does_not_erase(self, isolated_builder):
        builder = (
            isolated_builder(environ={API_KEY_ID_ENV_VAR: "envId", API_KEY_SECRET_ENV_VAR: "envSecret"})
            .set_id("   ")
            .set_secret("explicitSecret")
        )
        assert builder.build() == ApiKey(id="envId", secret="explicitSecret")

    def test_blank_higher_tier_values_do_not_erase(self, isolated_builder, tmp_path):
        location = _write(tmp_path / "blank.properties", "   ", "")
        builder = isolated_builder(
            environ={API_KEY_ID_ENV_VAR: "envId", API_KEY_SECRET_ENV_VAR: "envSecret"},
        ).set_file_location(location)

        assert builder.build() == ApiKey(id="envId", secret="envSecret")

    def test_property_values_are_trimmed(self, isolated_builder):
        builder = isolated_builder().set_properties({
            "apiKey.id": "  abc  ",
            "apiKey.secret": "\txyz ",
        })
        assert builder.build() == ApiKey(id="abc", secret="xyz")

    def test_empty_properties_mapping_skipped(self, isolated_builder):
        builder = isolated_builder(
            environ={API_KEY_ID_ENV_VAR: "envId", API_KEY_SECRET_ENV_VAR: "envSecret"},
        ).set_properties({})
        assert builder.build() == ApiKey(id="envId", secret="envSecret")


class TestSourceFailures:
    """Tests for unreadable sources."""

    def test_unreadable_default_file_is_ignored(self, isolated_builder, tmp_path):
        # A directory can't be read as a file
        builder = isolated_builder(
            environ={API_KEY_ID_ENV_VAR: "abc", API_KEY_SECRET_ENV_VAR: "xyz"},
            default_file=str(tmp_path),
        )
        assert builder.build() == ApiKey(id="abc", secret="xyz")

    def test_unreadable_file_location_is_fatal(self, isolated_builder, tmp_path):
        default_file = _write(tmp_path / "default.properties", "fileId", "fileSecret")
        builder = isolated_builder(default_file=default_file).set_file_location(
            str(tmp_path / "missing.properties")
        )

        with pytest.raises(ConfigurationError) as exc_info:
            builder.build()

        assert "missing.properties" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_failing_input_stream_is_fatal(self, isolated_builder):
        class BrokenStream:
            def read(self, *args):
                raise OSError("disk on fire")

        with pytest.raises(ConfigurationError) as exc_info:
            isolated_builder().set_input_stream(BrokenStream()).build()
        assert "input stream" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_failing_reader_is_fatal(self, isolated_builder):
        class BrokenReader:
            def read(self, *args):
                raise OSError("closed")

        with pytest.raises(ConfigurationError) as exc_info:
            isolated_builder().set_reader(BrokenReader()).build()
        assert "reader" in str(exc_info.value)

    def test_malformed_file_is_fatal(self, isolated_builder, tmp_path):
        path = tmp_path / "bad.properties"
        path.write_bytes(b"apiKey.id=\\u12\n")

        with pytest.raises(ConfigurationError):
            isolated_builder().set_file_location(str(path)).build()


class TestPropertyNames:
    """Tests for custom property names."""

    def test_custom_names_round_trip(self, isolated_builder, tmp_path):
        original = ApiKey(id="customId", secret="customSecret")
        path = write_api_key_file(
            original,
            str(tmp_path / "custom.properties"),
            id_property_name="my.id",
            secret_property_name="my.secret",
        )

        resolved = (
            isolated_builder()
            .set_file_location(f"file:{path}")
            .set_id_property_name("my.id")
            .set_secret_property_name("my.secret")
            .build()
        )
        assert resolved == original

    def test_custom_names_do_not_affect_environment_lookup(self, isolated_builder):
        builder = isolated_builder(environ={
            API_KEY_ID_ENV_VAR: "envId",
            API_KEY_SECRET_ENV_VAR: "envSecret",
        }).set_id_property_name("my.id").set_secret_property_name("my.secret")

        assert builder.build() == ApiKey(id="envId", secret="envSecret")

    def test_default_names_ignored_with_custom_names(self, isolated_builder):
        builder = (
            isolated_builder()
            .set_properties({"apiKey.id": "abc", "apiKey.secret": "xyz"})
            .set_id_property_name("my.id")
        )
        with pytest.raises(MissingCredentialError):
            builder.build()


class TestBuilder:
    """Tests for builder behavior."""

    def test_settings_snapshot_unaffected_by_later_changes(self, isolated_builder):
        builder = isolated_builder().set_id("first").set_secret("secret")
        snapshot = builder.settings
        builder.set_id("second")

        assert snapshot.id == "first"
        assert builder.settings.id == "second"

    def test_repeated_builds_are_independent(self, isolated_builder):
        builder = isolated_builder().set_id("abc").set_secret("xyz")
        first = builder.build()
        builder.set_secret("other")

        assert first == ApiKey(id="abc", secret="xyz")
        assert builder.build() == ApiKey(id="abc", secret="other")

    def test_settings_repr_hides_secret(self, isolated_builder):
        builder = isolated_builder().set_secret("topsecret")
        assert "topsecret" not in repr(builder.settings)

    def test_from_config(self, tmp_path, missing_default_file):
        location = _write(tmp_path / "conf.properties", "confId", "confSecret", "k.id", "k.secret")
        config = SdkConfig(api_key=ApiKeyConfig(
            file_location=location,
            id_property_name="k.id",
            secret_property_name="k.secret",
        ))

        builder = ApiKeyBuilder.from_config(config)
        assert builder.settings.file_location == location
        assert builder.settings.id_property_name == "k.id"

        from dataclasses import replace
        isolated = ApiKeyBuilder(replace(
            builder.settings,
            environ={},
            system_properties={},
            default_file_location=missing_default_file,
        ))
        assert isolated.build() == ApiKey(id="confId", secret="confSecret")

    def test_write_api_key_file_permissions(self, tmp_path):
        path = write_api_key_file(ApiKey(id="abc", secret="xyz"), str(tmp_path / "k.properties"))
        assert path.read_bytes() == b"apiKey.id=abc\napiKey.secret=xyz\n"
        assert path.stat().st_mode & 0o077 == 0
