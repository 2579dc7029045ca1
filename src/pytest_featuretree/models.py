"""Base Pydantic models for feature tree elements.

This module defines the foundational model classes used by every node
of a feature tree and by the runtime settings. Nodes are immutable and
strictly validated so that a tree is fixed once constructed and cannot
be changed while it is being walked.
"""

from typing import ClassVar

from pydantic import AliasChoices, BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all feature tree elements.

    Design principles enforced by this model:
        - Immutability: nodes cannot be modified after creation, so a
          walk never observes a tree changing under it.
        - Strict schema validation: unknown or extra keys are rejected
          to surface typos and conflicting modifiers early.

    Callables are stored as-is, hence arbitrary types are allowed.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )

    #: Variant tag used by the node discriminator.
    kind: ClassVar[str]

    @classmethod
    def input_keys(cls) -> frozenset[str]:
        """Return every key accepted on plain mapping input.

        Includes attribute names and all of their validation aliases.

        Returns:
            A set of accepted mapping keys.
        """
        keys: set[str] = set()
        for name, field in cls.model_fields.items():
            keys.add(name)
            if isinstance(field.validation_alias, AliasChoices):
                keys.update(
                    choice
                    for choice in field.validation_alias.choices
                    if isinstance(choice, str)
                )
            elif isinstance(field.validation_alias, str):
                keys.add(field.validation_alias)

        return frozenset(keys)


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Settings are resolved from explicit overrides and environment
    variables. Unknown environment variables are ignored.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
