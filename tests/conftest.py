import pytest

from delimcodec.bootstrap.config.loader import get_configfile
from delimcodec.bootstrap.deps import get_config, get_registry, get_serializer
from delimcodec.core.codec.decoder import Decoder
from delimcodec.core.codec.encoder import Encoder
from delimcodec.core.facade import DelimitedSerializer
from delimcodec.core.shapes.registry import ShapeRegistry


@pytest.fixture
def registry() -> ShapeRegistry:
    return ShapeRegistry()


@pytest.fixture
def encoder(registry) -> Encoder:
    return Encoder(registry)


@pytest.fixture
def decoder(registry) -> Decoder:
    return Decoder(registry)


@pytest.fixture
def serializer(registry) -> DelimitedSerializer:
    return DelimitedSerializer(registry=registry)


@pytest.fixture
def clean_deps(monkeypatch, tmp_path):
    """
    Run with an empty working directory and no DELIMCODEC_* variables,
    and drop the cached configuration before and after the test.
    """
    caches = (get_configfile, get_config, get_registry, get_serializer)

    for cache in caches:
        cache.cache_clear()
    monkeypatch.chdir(tmp_path)
    for name in ("DELIMCODEC_CONFIG", "DELIMCODEC_CHARSET", "DELIMCODEC_AUTO_REGISTER",
                 "DELIMCODEC_CACHE_SHAPES", "DELIMCODEC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    yield tmp_path

    for cache in caches:
        cache.cache_clear()
