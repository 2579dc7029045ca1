"""Tests for runtime settings."""

from typing import TYPE_CHECKING

import pydantic
import pytest

from pytest_featuretree.settings import TreeSettings

if TYPE_CHECKING:
    from pytest import MonkeyPatch


def test_defaults() -> None:
    """Collect `features_*.py` modules strictly by default."""
    settings = TreeSettings()

    assert settings.strict is True
    assert settings.file_pattern == r'^features_.+\.py$'
    assert settings.features_attribute == 'FEATURES'
    assert settings.context_attribute == 'CONTEXT'
    assert settings.scope_attribute == 'SCOPE'


def test_environment(monkeypatch: 'MonkeyPatch') -> None:
    """Read prefixed environment variables."""
    monkeypatch.setenv('FEATURETREE_STRICT', 'false')
    monkeypatch.setenv('FEATURETREE_FEATURES_ATTRIBUTE', 'TREE')
    monkeypatch.setenv('STRICT', 'true')

    settings = TreeSettings()

    assert settings.strict is False
    assert settings.features_attribute == 'TREE'


def test_overrides_win(monkeypatch: 'MonkeyPatch') -> None:
    """Prefer explicit overrides over the environment."""
    monkeypatch.setenv('FEATURETREE_STRICT', 'false')

    assert TreeSettings(strict=True).strict is True


def test_settings_are_immutable() -> None:
    """Forbid changes to resolved settings."""
    settings = TreeSettings()

    with pytest.raises(pydantic.ValidationError):
        settings.strict = False  # type: ignore[misc]
