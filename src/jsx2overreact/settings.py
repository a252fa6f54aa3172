from enum import Enum
from typing import Optional, Tuple, Type

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


class UnsupportedPolicy(str, Enum):
    RAISE = "raise"
    PLACEHOLDER = "placeholder"


class RenderSettings(BaseModel):
    """Settings controlling the shape of the generated builder code."""

    indent: str = Field(
        default="  ", description="The string used for one level of indentation."
    )
    line_end: str = Field(default="\n", description="The line terminator.")
    dom_namespace: str = Field(
        default="Dom",
        description="Namespace prefixed to lowercase (built-in DOM) element factories.",
    )
    fragment_name: str = Field(
        default="Fragment", description="Factory name emitted for JSX fragments."
    )
    add_all_method: str = Field(
        default="addAll",
        description="Cascade method used to render spread attributes (`{...props}`).",
    )
    styled_marker: str = Field(
        default="styled",
        description="Callee name that triggers the `styled(x)(y)` call rewrite.",
    )
    hook_prefix: str = Field(
        default="use",
        description=(
            "Callee prefix identifying hook calls whose `[value, setter]` "
            "destructuring is rewritten to `value.value` / `value.set`."
        ),
    )
    inline_object_max_properties: int = Field(
        default=1,
        description=(
            "Object literals with at most this many properties are rendered on "
            "a single line when none of their values span multiple lines."
        ),
    )
    unsupported: UnsupportedPolicy = Field(
        default=UnsupportedPolicy.RAISE,
        description=(
            'What to do with constructs that have no rendering rule: "raise" an '
            'UnsupportedConstruct error, or emit a "placeholder" comment (debug aid).'
        ),
    )


class ConverterSettings(BaseSettings):
    """Top-level settings for a conversion."""

    model_config = SettingsConfigDict(
        env_prefix="JSX2OVERREACT_", env_nested_delimiter="__"
    )

    render: RenderSettings = Field(
        default_factory=RenderSettings,
        description="A `RenderSettings` object with output formatting options.",
    )
    text_fallback: bool = Field(
        default=True,
        description=(
            "If True, input that fails to parse and contains no JSX markup "
            "(`<`, `>`, `{`, `}`) is treated as a single text node."
        ),
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(
    env_prefix: Optional[str] = None,
    env_file: Optional[str] = None,
    toml_file: Optional[str] = None,
    **kwargs,
) -> ConverterSettings:
    config_dict = SettingsConfigDict(
        env_prefix=env_prefix if env_prefix is not None else "JSX2OVERREACT_",
        env_nested_delimiter="__",
        env_file=env_file,
        toml_file=toml_file,
    )

    class Settings(ConverterSettings):
        model_config = config_dict

    return Settings(**kwargs)
