"""
Farm grid: planting, watering, harvesting.

Growth is never stored. A plot holds only what was planted and when; the
stage and progress shown to the client come from ``derive_growth`` at read
time, so they follow the clock without any background job.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Tuple

from database import MemoryDatabase, new_id
from errors import CropNotReady, InvalidCropOrPlot
from schemas import PLOT_COUNT, FarmPlot, FarmPlotView, Planting
from users import change_credits, get_user

logger = logging.getLogger(__name__)

CROP_GROWTH_DAYS = {
    "tomatoes": 14,
    "spinach": 7,
    "lettuce": 10,
    "carrots": 21,
    "peppers": 18,
}
DEFAULT_GROWTH_DAYS = 14

CROP_HARVEST_CREDITS = {
    "tomatoes": 50,
    "spinach": 30,
    "lettuce": 25,
    "carrots": 40,
    "peppers": 60,
}
DEFAULT_HARVEST_CREDITS = 25

PLANTED_PROGRESS = 10
GROWING_FROM_PROGRESS = 40
WATER_PER_ROUND = 20
MAX_WATER_LEVEL = 100
NEEDS_WATER_BELOW = 30


def growth_days(crop_type: str) -> int:
    return CROP_GROWTH_DAYS.get(crop_type, DEFAULT_GROWTH_DAYS)


def harvest_credits(crop_type: str) -> int:
    return CROP_HARVEST_CREDITS.get(crop_type, DEFAULT_HARVEST_CREDITS)


def derive_growth(now: datetime, planted_at: datetime, harvest_date: datetime) -> Tuple[str, int]:
    """Return ``(growth_stage, growth_progress)`` for a planted crop at ``now``."""
    if now >= harvest_date:
        return "ready", 100
    total = (harvest_date - planted_at).total_seconds()
    if total <= 0:
        return "ready", 100
    elapsed = max(0.0, (now - planted_at).total_seconds())
    progress = PLANTED_PROGRESS + round((100 - PLANTED_PROGRESS) * elapsed / total)
    # 100 is reserved for ready
    progress = min(progress, 99)
    stage = "seedling" if progress < GROWING_FROM_PROGRESS else "growing"
    return stage, progress


def _check_plot_index(plot_index: int) -> None:
    if not 0 <= plot_index < PLOT_COUNT:
        raise InvalidCropOrPlot(f"Plot index must be between 0 and {PLOT_COUNT - 1}")


def plot_view(plot: FarmPlot, now: datetime) -> FarmPlotView:
    planting = plot.planting
    if planting is None:
        return FarmPlotView(id=plot.id, user_id=plot.user_id, plot_index=plot.plot_index)
    stage, progress = derive_growth(now, planting.planted_at, planting.estimated_harvest_date)
    return FarmPlotView(
        id=plot.id,
        user_id=plot.user_id,
        plot_index=plot.plot_index,
        crop_type=planting.crop_type,
        planted_at=planting.planted_at,
        growth_stage=stage,
        growth_progress=progress,
        estimated_harvest_date=planting.estimated_harvest_date,
        water_level=planting.water_level,
        health_status="needs_water" if planting.water_level < NEEDS_WATER_BELOW else "healthy",
    )


def get_plots(db: MemoryDatabase, user_id: str) -> List[FarmPlotView]:
    """All nine cells of the grid; cells never planted read as empty."""
    get_user(db, user_id)
    now = db.now()
    views = []
    for plot_index in range(PLOT_COUNT):
        plot = db.farm_plots.get((user_id, plot_index))
        if plot is None:
            views.append(FarmPlotView(user_id=user_id, plot_index=plot_index))
        else:
            views.append(plot_view(plot, now))
    return views


def plant(db: MemoryDatabase, user_id: str, plot_index: int, crop_type: str) -> FarmPlotView:
    _check_plot_index(plot_index)
    crop_type = (crop_type or "").strip()
    if not crop_type:
        raise InvalidCropOrPlot("Crop type is required")

    with db.user_lock(user_id):
        get_user(db, user_id)
        plot = db.farm_plots.get((user_id, plot_index))
        if plot is not None and plot.planting is not None:
            raise InvalidCropOrPlot()

        now = db.now()
        planting = Planting(
            crop_type=crop_type,
            planted_at=now,
            estimated_harvest_date=now + timedelta(days=growth_days(crop_type)),
            water_level=MAX_WATER_LEVEL,
        )
        if plot is None:
            plot = FarmPlot(id=new_id(), user_id=user_id, plot_index=plot_index)
            db.farm_plots[(user_id, plot_index)] = plot
        plot.planting = planting

    logger.info(f"Planted {crop_type} in plot {plot_index} for {user_id}")
    return plot_view(plot, now)


def water(db: MemoryDatabase, user_id: str) -> int:
    """Top up every planted plot; returns how many were watered."""
    watered = 0
    with db.user_lock(user_id):
        get_user(db, user_id)
        for (owner, _), plot in db.farm_plots.items():
            if owner != user_id or plot.planting is None:
                continue
            plot.planting.water_level = min(MAX_WATER_LEVEL, plot.planting.water_level + WATER_PER_ROUND)
            watered += 1
    logger.info(f"Watered {watered} plots for {user_id}")
    return watered


def harvest(db: MemoryDatabase, user_id: str, plot_index: int) -> int:
    """Empty a ready plot and pay its crop reward; returns the credits earned."""
    _check_plot_index(plot_index)

    with db.user_lock(user_id):
        user = get_user(db, user_id)
        plot = db.farm_plots.get((user_id, plot_index))
        if plot is None or plot.planting is None:
            raise CropNotReady()
        planting = plot.planting
        stage, _ = derive_growth(db.now(), planting.planted_at, planting.estimated_harvest_date)
        if stage != "ready":
            raise CropNotReady()

        credits = harvest_credits(planting.crop_type)
        change_credits(db, user, credits, f"harvest:{planting.crop_type}")
        plot.planting = None

    logger.info(f"Harvested {planting.crop_type} from plot {plot_index} for {user_id}: +{credits}")
    return credits
