from datetime import datetime, timedelta, timezone

import pytest

from errors import CropNotReady, InvalidCropOrPlot
from farm import derive_growth, get_plots, harvest, plant, water
from seed import DEFAULT_USER_ID

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _plot(store, index):
    return get_plots(store, DEFAULT_USER_ID)[index]


def _credits(store):
    return store.users[DEFAULT_USER_ID].sustaina_credits


def test_derive_growth_at_planting():
    harvest_date = NOW + timedelta(days=10)
    assert derive_growth(NOW, NOW, harvest_date) == ("seedling", 10)


def test_derive_growth_midway():
    harvest_date = NOW + timedelta(days=10)
    now = NOW + timedelta(days=5)
    assert derive_growth(now, NOW, harvest_date) == ("growing", 55)


def test_derive_growth_ready_once_harvest_date_passes():
    harvest_date = NOW + timedelta(days=10)
    assert derive_growth(harvest_date, NOW, harvest_date) == ("ready", 100)
    later = harvest_date + timedelta(days=3)
    assert derive_growth(later, NOW, harvest_date) == ("ready", 100)


def test_derive_growth_never_reports_100_before_ready():
    harvest_date = NOW + timedelta(days=10)
    now = harvest_date - timedelta(seconds=1)
    stage, progress = derive_growth(now, NOW, harvest_date)
    assert stage == "growing"
    assert progress == 99


def test_seeded_grid(store):
    plots = get_plots(store, DEFAULT_USER_ID)
    assert len(plots) == 9
    assert [p.plot_index for p in plots] == list(range(9))
    assert plots[0].crop_type == "tomatoes"
    assert plots[0].growth_stage == "growing"
    assert plots[1].growth_stage == "ready"
    assert plots[2].growth_stage == "ready"
    assert plots[3].growth_stage == "seedling"
    for plot in plots[5:]:
        assert plot.crop_type is None
        assert plot.growth_stage == "empty"
        assert plot.growth_progress == 0


def test_plant_empty_plot(store, clock):
    view = plant(store, DEFAULT_USER_ID, 5, "spinach")
    assert view.crop_type == "spinach"
    assert view.growth_stage == "seedling"
    assert view.growth_progress == 10
    assert view.water_level == 100
    assert view.planted_at == clock.current
    assert view.estimated_harvest_date == clock.current + timedelta(days=7)
    assert _plot(store, 5).crop_type == "spinach"


def test_plant_unknown_crop_uses_default_duration(store, clock):
    view = plant(store, DEFAULT_USER_ID, 6, "okra")
    assert view.estimated_harvest_date == clock.current + timedelta(days=14)


def test_plant_occupied_plot_fails_and_leaves_it_unchanged(store):
    before = _plot(store, 0)
    with pytest.raises(InvalidCropOrPlot):
        plant(store, DEFAULT_USER_ID, 0, "carrots")
    assert _plot(store, 0) == before


@pytest.mark.parametrize("plot_index", [-1, 9, 42])
def test_plant_out_of_range_plot(store, plot_index):
    with pytest.raises(InvalidCropOrPlot):
        plant(store, DEFAULT_USER_ID, plot_index, "spinach")


def test_plant_requires_crop_type(store):
    with pytest.raises(InvalidCropOrPlot):
        plant(store, DEFAULT_USER_ID, 5, "   ")
    assert _plot(store, 5).growth_stage == "empty"


def test_harvest_not_ready_fails_without_credit_change(store):
    credits = _credits(store)
    with pytest.raises(CropNotReady):
        harvest(store, DEFAULT_USER_ID, 0)
    assert _credits(store) == credits
    assert _plot(store, 0).crop_type == "tomatoes"


def test_harvest_never_planted_plot(store):
    with pytest.raises(CropNotReady):
        harvest(store, DEFAULT_USER_ID, 8)


def test_harvest_ready_plot_resets_and_pays(store):
    credits = _credits(store)
    earned = harvest(store, DEFAULT_USER_ID, 1)
    assert earned == 30
    assert _credits(store) == credits + 30
    plot = _plot(store, 1)
    assert plot.growth_stage == "empty"
    assert plot.crop_type is None
    assert plot.estimated_harvest_date is None


def test_crop_becomes_ready_as_clock_advances(store, clock):
    plant(store, DEFAULT_USER_ID, 5, "tomatoes")
    clock.advance(days=13)
    assert _plot(store, 5).growth_stage == "growing"
    with pytest.raises(CropNotReady):
        harvest(store, DEFAULT_USER_ID, 5)

    clock.advance(days=1)
    assert _plot(store, 5).growth_stage == "ready"
    credits = _credits(store)
    assert harvest(store, DEFAULT_USER_ID, 5) == 50
    assert _credits(store) == credits + 50


def test_harvested_plot_can_be_replanted(store):
    harvest(store, DEFAULT_USER_ID, 2)
    view = plant(store, DEFAULT_USER_ID, 2, "peppers")
    assert view.growth_stage == "seedling"


def test_water_caps_at_100(store):
    for _ in range(10):
        water(store, DEFAULT_USER_ID)
    for plot in get_plots(store, DEFAULT_USER_ID):
        assert plot.water_level <= 100
    assert _plot(store, 0).water_level == 100


def test_water_counts_planted_plots_only(store):
    assert water(store, DEFAULT_USER_ID) == 5
    assert (DEFAULT_USER_ID, 7) not in store.farm_plots


def test_low_water_marks_plot_as_needing_water(store):
    store.farm_plots[(DEFAULT_USER_ID, 4)].planting.water_level = 10
    assert _plot(store, 4).health_status == "needs_water"
    water(store, DEFAULT_USER_ID)
    assert _plot(store, 4).water_level == 30
    assert _plot(store, 4).health_status == "healthy"
