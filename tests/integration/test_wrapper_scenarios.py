"""Integration tests for wrappers combined with policies, projections and stores."""

from unittest.mock import Mock

import pytest

from propwrap import (
    ExternalCollaboratorFailure,
    FeatureSettings,
    InMemoryKeyValueStore,
    NoProjectionConfigured,
    clamping,
    configure_settings_store,
    get_settings_store,
    stored_setting,
)
from propwrap.settings import BAR_FEATURE_ENABLED, FOO_FEATURE_ENABLED


@pytest.mark.integration
def test_clamped_read_never_leaves_range():
    """Clamping wrapper reads stay inside the range regardless of writes"""
    wrapper = clamping(0, 10, 20)
    for raw in range(-100, 101, 7):
        wrapper.set(raw)
        assert 10 <= wrapper.get() <= 20


@pytest.mark.integration
def test_read_time_clamp_keeps_raw_value_for_projection():
    """Setting above the upper bound reads the bound while the projection sees the raw value"""
    wrapper = clamping(0, 0, 100, projected=True)

    wrapper.set(250)

    assert wrapper.get() == 100
    assert wrapper.raw_value == 250
    assert wrapper.get_projected() is True


@pytest.mark.integration
def test_projection_tracks_latest_write_for_hundred_range():
    """[0, 100] range flags 80 but not 50"""
    wrapper = clamping(0, 0, 100, projected=True)

    wrapper.set(80)
    assert wrapper.get_projected() is True

    wrapper.set(50)
    assert wrapper.get_projected() is False


@pytest.mark.integration
def test_math_score_scenario_uses_truncated_threshold():
    """[0, 150] range has threshold 90, so 80 is not flagged"""
    wrapper = clamping(0, 0, 150, projected=True)

    wrapper.set(80)

    assert wrapper.get() == 80
    assert wrapper.get_projected() is False


@pytest.mark.integration
def test_history_and_math_scores_differ_for_same_value():
    math_score = clamping(80, 0, 150, projected=True)
    history_score = clamping(80, 0, 100, projected=True)

    assert math_score.value == history_score.value == 80
    assert math_score.projected_value is False
    assert history_score.projected_value is True


@pytest.mark.integration
def test_store_backed_round_trip(kv_store):
    """set(v) followed by get() returns v with no caching lag"""
    wrapper = stored_setting("volume", 5, store=kv_store)

    for value in (1, 9, 0, 3):
        wrapper.set(value)
        assert wrapper.get() == value


@pytest.mark.integration
def test_store_backed_sees_external_changes(kv_store):
    wrapper = stored_setting("volume", 5, store=kv_store)
    wrapper.set(1)

    kv_store.set("volume", 7)

    assert wrapper.get() == 7


@pytest.mark.integration
def test_store_backed_default_fallback(kv_store):
    wrapper = stored_setting("volume", 5, store=kv_store)
    assert wrapper.get() == 5

    wrapper.set(2)
    kv_store.delete("volume")
    assert wrapper.get() == 5


@pytest.mark.integration
def test_store_backed_wrapper_has_no_projection(kv_store):
    wrapper = stored_setting("volume", 5, store=kv_store)
    with pytest.raises(NoProjectionConfigured):
        wrapper.get_projected()


@pytest.mark.integration
def test_store_failures_propagate_verbatim():
    """Collaborator exceptions reach the caller unchanged and are not retried"""
    failure = ExternalCollaboratorFailure("backend down")
    store = Mock()
    store.get.side_effect = failure
    store.set.side_effect = failure
    wrapper = stored_setting("volume", 5, store=store)

    with pytest.raises(ExternalCollaboratorFailure) as excinfo:
        wrapper.get()
    assert excinfo.value is failure

    with pytest.raises(ExternalCollaboratorFailure):
        wrapper.set(1)
    assert store.set.call_count == 1
    assert wrapper.raw_value == 5


@pytest.mark.integration
def test_closed_store_failure_reaches_wrapper_caller():
    store = InMemoryKeyValueStore()
    wrapper = stored_setting("volume", 5, store=store)
    store.close()

    with pytest.raises(ExternalCollaboratorFailure):
        wrapper.get()


class TestFeatureSettings:
    """Feature flags persisted through the settings store."""

    @pytest.mark.integration
    def test_flags_default_to_false(self, kv_store):
        settings = FeatureSettings(kv_store)
        assert settings.is_foo_feature_enabled is False
        assert settings.is_bar_feature_enabled is False

    @pytest.mark.integration
    def test_flags_write_through_to_store(self, kv_store):
        settings = FeatureSettings(kv_store)

        settings.is_foo_feature_enabled = True

        assert kv_store.get(FOO_FEATURE_ENABLED) is True
        assert kv_store.get(BAR_FEATURE_ENABLED) is None
        assert settings.is_foo_feature_enabled is True
        assert settings.is_bar_feature_enabled is False

    @pytest.mark.integration
    def test_flags_shared_through_process_store(self):
        store = configure_settings_store(InMemoryKeyValueStore())

        FeatureSettings().is_bar_feature_enabled = True

        assert FeatureSettings().is_bar_feature_enabled is True
        assert store.get(BAR_FEATURE_ENABLED) is True
        assert get_settings_store() is store

    @pytest.mark.integration
    @pytest.mark.edge_case
    def test_non_bool_entry_reads_default(self, kv_store):
        kv_store.set(FOO_FEATURE_ENABLED, "true")
        assert FeatureSettings(kv_store).is_foo_feature_enabled is False

    @pytest.mark.integration
    def test_repr(self, kv_store):
        assert repr(FeatureSettings(kv_store)) == "FeatureSettings(foo=False, bar=False)"
