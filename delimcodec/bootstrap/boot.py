from delimcodec.bootstrap.deps import get_config, get_serializer
from delimcodec.core.facade import DelimitedSerializer
from delimcodec.core.helpers.utils import setup_logging


def bootstrap() -> DelimitedSerializer:
    """
    Load the configuration, apply its log level and return the shared
    serializer. Library users who manage logging themselves can call
    `deps.get_serializer()` directly.
    """
    config = get_config()
    setup_logging(config.log_level)
    return get_serializer()
