"""
Record schemas for the AgriVenture store

Each Pydantic model corresponds to one table of the in-memory store in
database.py. Field names are snake_case in Python and camelCase on the wire.

Tables defined:
- User -> "user"
- FarmPlot -> "farm_plot" (keyed by user id + plot index)
- LearningModule -> "learning_module"
- UserProgress -> "user_progress" (keyed by user id + module id)
- Equipment -> "equipment"
- UserPurchase -> "user_purchase"
- Achievement -> "achievement"
- UserAchievement -> "user_achievement"
- CommunityPost -> "community_post"
- CreditTransaction -> "credit_transaction"
- WeatherData -> single snapshot, not a table
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GrowthStage = Literal["empty", "seedling", "growing", "ready"]
HealthStatus = Literal["healthy", "needs_water"]
Difficulty = Literal["beginner", "intermediate", "advanced"]
PostType = Literal["success_story", "question", "tip", "discussion"]

PLOT_COUNT = 9


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(CamelModel):
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    sustaina_credits: int = Field(0, ge=0, description="Sustaina-Credit balance")
    farm_level: int = Field(1, ge=1)
    learning_streak: int = Field(0, ge=0, description="Lessons completed in a row")
    location: Optional[str] = None
    created_at: Optional[datetime] = None


class Planting(CamelModel):
    """What occupies a plot between planting and harvest."""
    crop_type: str
    planted_at: datetime
    estimated_harvest_date: datetime
    water_level: int = Field(100, ge=0, le=100)


class FarmPlot(CamelModel):
    id: str
    user_id: str
    plot_index: int = Field(..., ge=0, lt=PLOT_COUNT)
    planting: Optional[Planting] = Field(None, description="None while the plot is empty")


class FarmPlotView(CamelModel):
    """A plot as the client sees it, with growth derived at read time."""
    id: Optional[str] = None
    user_id: str
    plot_index: int
    crop_type: Optional[str] = None
    planted_at: Optional[datetime] = None
    growth_stage: GrowthStage = "empty"
    growth_progress: int = Field(0, ge=0, le=100)
    estimated_harvest_date: Optional[datetime] = None
    water_level: int = Field(100, ge=0, le=100)
    health_status: HealthStatus = "healthy"


class LearningModule(CamelModel):
    id: str
    title: str
    description: str
    category: str
    difficulty: Difficulty
    lessons_count: int = Field(..., gt=0)
    credits_reward: int = Field(..., ge=0)
    prerequisite_modules: List[str] = Field(default_factory=list)
    estimated_duration: Optional[int] = Field(None, description="Minutes")
    thumbnail_color: str


class UserProgress(CamelModel):
    id: str
    user_id: str
    module_id: str
    current_lesson: int = 0
    completed_lessons: int = Field(0, ge=0)
    progress: int = Field(0, ge=0, le=100)
    completed: bool = False
    credits_earned: int = Field(0, ge=0)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class UserProgressWithModule(UserProgress):
    module: LearningModule


class Equipment(CamelModel):
    id: str
    name: str
    description: str
    category: str
    price: Decimal
    original_price: Optional[Decimal] = None
    credits_required: int = Field(..., ge=0)
    discount_percentage: int = Field(0, ge=0, le=100)
    in_stock: bool = True
    thumbnail_color: str
    specifications: Optional[Dict[str, Any]] = None


class UserPurchase(CamelModel):
    id: Optional[str] = None
    user_id: str
    equipment_id: str
    credits_used: int
    purchase_price: Decimal
    purchased_at: Optional[datetime] = None


class Achievement(CamelModel):
    id: str
    title: str
    description: str
    icon_type: str
    credits_reward: int = Field(..., ge=0)
    category: str
    color: str


class UserAchievement(CamelModel):
    id: Optional[str] = None
    user_id: str
    achievement_id: str
    earned_at: Optional[datetime] = None


class UserAchievementWithDetails(UserAchievement):
    achievement: Achievement


class CommunityPost(CamelModel):
    id: Optional[str] = None
    user_id: str
    title: str
    content: str
    type: PostType = "success_story"
    metrics: Optional[Dict[str, Any]] = None
    likes_count: int = 0
    comments_count: int = 0
    created_at: Optional[datetime] = None


class CommunityPostWithUser(CommunityPost):
    user: User


class CreditTransaction(CamelModel):
    id: Optional[str] = None
    user_id: str
    amount: int = Field(..., description="Signed change to the balance")
    reason: str
    created_at: Optional[datetime] = None


class TopContributor(CamelModel):
    user: User
    weekly_credits: int


class CommunityStats(CamelModel):
    active_farmers: int
    success_stories: int
    credits_earned_today: int
    equipment_redeemed: int


class WeatherData(CamelModel):
    id: str
    location: str
    temperature: int
    humidity: int
    wind_speed: int
    uv_index: int
    condition: str
    forecast: Optional[Dict[str, Any]] = None
    updated_at: Optional[datetime] = None
