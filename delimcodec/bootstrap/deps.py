import json
from functools import lru_cache

from pydantic import ValidationError

from delimcodec.bootstrap.config.settings import CodecSettings
from delimcodec.core.facade import DelimitedSerializer
from delimcodec.core.shapes.registry import ShapeRegistry


@lru_cache
def get_serializer() -> DelimitedSerializer:
    config = get_config()
    return DelimitedSerializer(
        registry=get_registry(),
        charset=config.charset
    )


@lru_cache
def get_registry() -> ShapeRegistry:
    config = get_config()
    return ShapeRegistry(
        auto_register=config.auto_register,
        cache_shapes=config.cache_shapes
    )


@lru_cache
def get_config() -> CodecSettings:
    try:
        return CodecSettings()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
