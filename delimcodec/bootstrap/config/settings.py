import codecs
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from pydantic_core.core_schema import ValidationInfo

from delimcodec.bootstrap.config.loader import get_configfile
from delimcodec.core.separators import Separators


class CodecSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DELIMCODEC_",
        extra="ignore"
    )

    charset: Annotated[
        str,
        Field(
            description=(
                "Character set used to turn the token stream into bytes and back.\n"
                "The separator alphabet is fixed; the charset must represent the\n"
                "field separators of every depth up to 64 (UTF-8 and Latin-1 can,\n"
                "ASCII cannot). Single-byte charsets run out of field separators\n"
                "further down: Latin-1 stops at depth 76, and deeper values fail in\n"
                "dumps with a FormatError. UTF-8 has no practical limit."
            ),
            default="utf-8"
        )
    ]

    auto_register: Annotated[
        bool,
        Field(
            description=(
                "Register dataclasses on first use instead of requiring an explicit\n"
                "registration before they are encoded or decoded."
            ),
            default=True
        )
    ]

    cache_shapes: Annotated[
        bool,
        Field(
            description=(
                "Keep the field shapes of registered types between calls.\n"
                "When disabled, shapes are recomputed on every lookup."
            ),
            default=True
        )
    ]

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        Field(
            description="Logging verbosity applied by `bootstrap()`.",
            default="INFO"
        )
    ]

    @field_validator("charset")
    @classmethod
    def validate_charset(cls, v: str, _: ValidationInfo) -> str:
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown charset '{v}'")

        try:
            Separators.alphabet().encode(v)
        except UnicodeEncodeError:
            raise ValueError(
                f"Charset '{v}' cannot represent the separators up to depth {Separators.CHECKED_DEPTH}"
            )
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        configfile = get_configfile()
        if configfile is None:
            return init_settings, env_settings
        return init_settings, env_settings, YamlConfigSettingsSource(settings_cls, yaml_file=configfile)
