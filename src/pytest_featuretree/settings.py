"""Runtime settings of the feature tree plugin.

Values come from explicit overrides (command-line options) first, then
from `FEATURETREE_*` environment variables, then from defaults.
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from pytest_featuretree.models import SettingsModel


class TreeSettings(SettingsModel):
    """Feature module discovery and node construction settings."""

    model_config = SettingsConfigDict(
        env_prefix='FEATURETREE_',
        frozen=True,
        extra='ignore',
    )

    strict: bool = Field(
        default=True,
        title='Strict node construction',
        description=(
            'Reject malformed nodes and nodes with conflicting modifiers. '
            'When disabled, such nodes are classified by shape and '
            'unrecognised nodes are skipped.'
        ),
    )

    file_pattern: str = Field(
        default=r'^features_.+\.py$',
        title='Feature module pattern',
        description='Regular expression matched against file names to collect.',
    )

    features_attribute: str = Field(
        default='FEATURES',
        title='Features attribute',
        description='Module attribute holding the root node sequence.',
    )

    context_attribute: str = Field(
        default='CONTEXT',
        title='Context attribute',
        description='Module attribute holding a context exposing `document`.',
    )

    scope_attribute: str = Field(
        default='SCOPE',
        title='Scope attribute',
        description='Module attribute holding a bare root scope.',
    )
