"""Tests for logical path normalization and real path resolution."""

import pytest

from alistrefresh.core.errors import MissingCredentialError, UnresolvablePathError
from alistrefresh.resolve.paths import (
    PathResolver,
    is_within_mount,
    join_real_path,
    normalize_base_path,
    normalize_location,
    relative_tail,
)
from alistrefresh.store.models import Configuration, CryptCredentials


@pytest.fixture
def config() -> Configuration:
    return Configuration(
        service_origin="https://alist.example.com",
        auth_token="tok",
        virtual_mount_path="/crypt",
        real_base_path="/real",
        crypt=CryptCredentials(password="pw", salt="s1", encoding="base64"),
    )


class TestNormalizeLocation:
    """Test page pathname normalization."""

    def test_strips_route_prefix_and_trailing_slash(self):
        assert normalize_location("/@/crypt/My Folder/") == "/crypt/My Folder"

    def test_root_stays_root(self):
        assert normalize_location("/") == "/"

    def test_empty_becomes_root(self):
        assert normalize_location("") == "/"

    def test_decodes_before_anything_else(self):
        """Encoded characters reach the cipher in readable form."""
        assert normalize_location("/crypt/My%20Folder/%E6%96%87%E4%BB%B6") == "/crypt/My Folder/文件"

    @pytest.mark.parametrize("prefix", ["@", "#", "dav"])
    def test_known_route_prefixes(self, prefix: str):
        assert normalize_location(f"/{prefix}/crypt/a") == "/crypt/a"

    def test_only_leading_prefix_is_removed(self):
        assert normalize_location("/crypt/dav/a") == "/crypt/dav/a"

    def test_adds_missing_leading_slash(self):
        assert normalize_location("crypt/a") == "/crypt/a"


class TestMountMembership:
    """Test mount containment used for control visibility."""

    def test_child_is_within(self):
        assert is_within_mount("/crypt/a", "/crypt")

    def test_mount_itself_is_within(self):
        assert is_within_mount("/crypt", "/crypt")

    def test_other_path_is_outside(self):
        assert not is_within_mount("/other", "/crypt")

    def test_sibling_with_shared_prefix_is_outside(self):
        assert not is_within_mount("/crypto/a", "/crypt")

    def test_relative_tail(self):
        assert relative_tail("/crypt/a/b", "/crypt") == "a/b"
        assert relative_tail("/crypt", "/crypt") == ""

    def test_relative_tail_outside_mount_raises(self):
        with pytest.raises(UnresolvablePathError, match="not inside"):
            relative_tail("/other/a", "/crypt")

    def test_join_real_path(self):
        assert join_real_path("/real", "x") == "/real/x"
        assert join_real_path("/", "x") == "/x"
        assert join_real_path("/real", "") == "/real"


class TestPathResolver:
    """Test PathResolver.resolve."""

    @pytest.mark.asyncio
    async def test_mount_root_resolves_to_base(self, config, cipher_factory):
        resolver = PathResolver(cipher_factory)
        assert await resolver.resolve("/crypt", config) == "/real"

    @pytest.mark.asyncio
    async def test_mount_root_never_touches_cipher(self, config):
        def factory(credentials):
            raise AssertionError("cipher should not be built for the mount root")

        resolver = PathResolver(factory)
        assert await resolver.resolve("/crypt", config) == "/real"

    @pytest.mark.asyncio
    async def test_tail_is_encrypted_and_appended(self, config, cipher_factory):
        resolver = PathResolver(cipher_factory)
        tail = "My Folder/sub"
        expected = "/real/" + await cipher_factory(config.crypt).encrypt(tail)

        assert await resolver.resolve(f"/crypt/{tail}", config) == expected
        assert expected == "/real/redloF yM.s1/bus.s1"

    @pytest.mark.asyncio
    async def test_resolution_is_deterministic(self, config, cipher_factory):
        resolver = PathResolver(cipher_factory)
        first = await resolver.resolve("/crypt/a/b", config)
        second = await resolver.resolve("/crypt/a/b", config)
        assert first == second

    @pytest.mark.asyncio
    async def test_cipher_gets_credentials_from_config(self, config):
        seen = []

        class RecordingCipher:
            def __init__(self, credentials):
                seen.append(credentials)

            async def encrypt(self, tail):
                return "enc"

        resolver = PathResolver(RecordingCipher)
        await resolver.resolve("/crypt/a", config)
        assert seen == [config.crypt]

    @pytest.mark.asyncio
    async def test_root_base_path_has_single_slash(self, config, cipher_factory):
        resolver = PathResolver(cipher_factory)
        root_config = config.model_copy(update={"real_base_path": "/"})
        assert await resolver.resolve("/crypt/a", root_config) == "/a.s1"

    @pytest.mark.asyncio
    async def test_path_outside_mount_raises(self, config, cipher_factory):
        resolver = PathResolver(cipher_factory)
        with pytest.raises(UnresolvablePathError):
            await resolver.resolve("/other/a", config)

    @pytest.mark.asyncio
    async def test_missing_credentials_raise(self, config, cipher_factory):
        resolver = PathResolver(cipher_factory)
        bare = config.model_copy(update={"crypt": None})
        with pytest.raises(MissingCredentialError):
            await resolver.resolve("/crypt/a", bare)

    @pytest.mark.asyncio
    async def test_mount_root_needs_no_credentials(self, config, cipher_factory):
        resolver = PathResolver(cipher_factory)
        bare = config.model_copy(update={"crypt": None})
        assert await resolver.resolve("/crypt", bare) == "/real"


class TestNormalizeBasePath:
    """Test real base path normalization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("real", "/real"), ("/real/", "/real"), ("/", "/"), ("", "/"), ("/dav/x", "/dav/x")],
    )
    def test_normalize(self, raw: str, expected: str):
        assert normalize_base_path(raw) == expected
