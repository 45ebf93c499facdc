"""Unit tests for provider selection."""

import pytest

from estate.util.di import (
    PersistenceProvider,
    ProdApplicationProvider,
    ProdPersistenceProvider,
    get_provider,
    mockable_components,
)
from tests.di import MockPersistenceProvider, build_test_container


def test_mockable_components():
    assert mockable_components() == {"google", "notification", "persistence"}


def test_concrete_provider_used_as_is():
    assert get_provider(ProdApplicationProvider) is ProdApplicationProvider
    assert get_provider(ProdApplicationProvider, use_mock=True) is ProdApplicationProvider


def test_component_resolves_by_mock_flag():
    assert get_provider(PersistenceProvider) is ProdPersistenceProvider
    assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider


def test_unknown_unmock_rejected():
    with pytest.raises(ValueError, match="Unknown components"):
        build_test_container(unmock={"bluetooth"})
